from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from PySrtLab.EncodingSniffer import EncodingInfo

if TYPE_CHECKING:
    from PySrtLab.SubtitleValidator import TimingIssue

@dataclass
class MalformedLine:
    source : str|None
    line_number : int
    text : str

@dataclass
class SrtLabResult:
    """
    Counts and diagnostics accumulated over a single run
    """
    encodings : list[tuple[str|None, EncodingInfo]] = field(default_factory=list)
    malformed_lines : list[MalformedLine] = field(default_factory=list)
    pair_warnings : list[str] = field(default_factory=list)
    timing_issues : list[TimingIssue] = field(default_factory=list)
    ocr_fixes : int = 0
    cleaned : int = 0

    @property
    def input_has_bom(self) -> bool|None:
        """BOM presence of the first input, or None if no input has been read"""
        return self.encodings[0][1].has_bom if self.encodings else None

    @property
    def input_charset(self) -> str|None:
        return self.encodings[0][1].charset if self.encodings else None

    def IssuesOfType(self, issue_type : type) -> list[TimingIssue]:
        return [ issue for issue in self.timing_issues if isinstance(issue, issue_type) ]
