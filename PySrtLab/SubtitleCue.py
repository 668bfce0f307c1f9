from __future__ import annotations

from PySrtLab.Helpers.Time import FormatTimestamp

class SubtitleCue:
    """
    A single subtitle: a time range in seconds and its text.

    Each line of text is stored with a trailing newline, so a cue read from "Hello\\nWorld" holds
    "Hello\\nWorld\\n". The output line ending is only applied when the cue is rendered.
    """
    def __init__(self, start : float = 0.0, end : float = 0.0, text : str = ""):
        self.start : float = start
        self.end : float = end
        self.text : str = text

    @property
    def duration(self) -> float:
        return self.end - self.start

    @property
    def srt_start(self) -> str:
        return FormatTimestamp(self.start)

    @property
    def srt_end(self) -> str:
        return FormatTimestamp(self.end)

    def AddLine(self, line : str) -> None:
        self.text += f"{line}\n"

    def __eq__(self, other) -> bool:
        if not isinstance(other, SubtitleCue):
            return NotImplemented
        return (self.start, self.end, self.text) == (other.start, other.end, other.text)

    def __repr__(self) -> str:
        return f"SubtitleCue({self.srt_start} --> {self.srt_end}, {self.text!r})"
