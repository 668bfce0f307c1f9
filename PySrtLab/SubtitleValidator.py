from __future__ import annotations
from collections.abc import Callable
from dataclasses import dataclass
import logging

import regex

from PySrtLab.CueStore import CueStore
from PySrtLab.Helpers.Time import FormatTimestamp, ToMilliseconds
from PySrtLab.Options import Options
from PySrtLab.SrtLabResult import SrtLabResult
from PySrtLab.SubtitleCue import SubtitleCue

# Subtitles shorter than this are never reported as sticky
STICKY_THRESHOLD = 3.0

# Extra time given beyond the required duration when extending a subtitle
FIX_MARGIN = 1.05

FIXED = "fixed"
PARTIALLY_FIXED = "partially fixed"
CANNOT_FIX = "cannot fix"

@dataclass
class TimingIssue:
    """
    A timing problem with a subtitle, identified by its index in the output
    """
    index : int
    start : float
    fix : str|None = None

    @property
    def description(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        message = self.description
        if self.fix == PARTIALLY_FIXED:
            message += f" -> Partially fixed ({self.fixed_duration:.2f})"
        elif self.fix:
            message += f" -> {self.fix.capitalize()}"
        return message

    @property
    def fixed_duration(self) -> float:
        return 0.0

@dataclass
class OverlapIssue(TimingIssue):
    @property
    def description(self) -> str:
        return f"Sub {self.index} overlaps with next"

@dataclass
class TooFastIssue(TimingIssue):
    duration : float = 0.0
    expected : float = 0.0
    new_duration : float = 0.0

    @property
    def description(self) -> str:
        return f"Sub {self.index} too fast: {self.duration:.2f} < {self.expected:.2f} (at {FormatTimestamp(self.start)})"

    @property
    def fixed_duration(self) -> float:
        return self.new_duration

@dataclass
class StickyIssue(TimingIssue):
    duration : float = 0.0
    expected : float = 0.0

    @property
    def description(self) -> str:
        return f"Sub {self.index} seems sticky: {self.duration:.2f} secs, expected {self.expected:.2f} (at {FormatTimestamp(self.start)})"

_whitespace_runs = regex.compile(r"\s\s+")
_line_breaks = regex.compile(r"\s?\n")
_space_after_break = regex.compile(r"\]\s")
_ellipsis = regex.compile(r"\.\.\.")

def CanonicalLength(text : str) -> int:
    """
    Length of the text for estimating reading time, with line breaks and runs of whitespace
    counted as one character each and an ellipsis counted as one.
    """
    canonical = ']' + text
    canonical = _whitespace_runs.sub(' ', canonical)
    canonical = _line_breaks.sub(']', canonical)
    canonical = _space_after_break.sub(']', canonical)
    canonical = _ellipsis.sub('.', canonical)
    return len(canonical)

class SubtitleValidator:
    """
    Detects overlapping, too brief and overly long subtitles, and optionally extends or trims
    the end times of overlapping and too brief subtitles. Start times are never changed.

    Overly long ("sticky") subtitles are only reported, since they are often intentional.
    """
    def __init__(self, options : Options):
        self.fix : bool = options.get_bool('fix_length')
        self.gap : float = options.gap
        self.min_ratio : float = options.get_float('min_ratio') or 0.0
        self.stick_ratio : float = options.get_float('stick_ratio') or 0.0
        self.min_duration : float = options.get_float('min_duration') or 0.0

    def ValidateCues(self, store : CueStore, result : SrtLabResult, skip : Callable[[SubtitleCue], bool]|None = None) -> list[TimingIssue]:
        """
        Check every cue in order. Cues matching skip are not checked or counted, but still
        constrain the cue before them.
        """
        issues : list[TimingIssue] = []
        index = 0

        for position, cue in enumerate(store):
            if skip and skip(cue):
                continue

            index += 1
            next_cue = store.Next(position)

            overlap = self.CheckOverlap(index, cue, next_cue)
            if overlap:
                issues.append(overlap)

            duration_issue = self.CheckDuration(index, cue, next_cue)
            if duration_issue:
                issues.append(duration_issue)

        for issue in issues:
            logging.warning(str(issue))

        result.timing_issues.extend(issues)
        return issues

    def CheckOverlap(self, index : int, cue : SubtitleCue, next_cue : SubtitleCue|None) -> OverlapIssue|None:
        if next_cue is None or next_cue.start >= cue.end:
            return None

        issue = OverlapIssue(index, cue.start)
        if self.fix:
            cue.end = next_cue.start - self.gap
            issue.fix = FIXED

        return issue

    def CheckDuration(self, index : int, cue : SubtitleCue, next_cue : SubtitleCue|None) -> TimingIssue|None:
        length = CanonicalLength(cue.text)
        duration = cue.duration
        required = max(self.min_duration, self.min_ratio * length)

        if duration < required:
            issue = TooFastIssue(index, cue.start, duration=duration, expected=required)
            if self.fix:
                self._extend(cue, next_cue, required, issue)
            return issue

        expected = self.stick_ratio * length
        if duration > STICKY_THRESHOLD and duration > expected:
            return StickyIssue(index, cue.start, duration=duration, expected=expected)

        return None

    def _extend(self, cue : SubtitleCue, next_cue : SubtitleCue|None, required : float, issue : TooFastIssue) -> None:
        """
        Extend the cue to the required duration if it fits before the next cue, otherwise as far as it can go
        """
        new_end = cue.start + FIX_MARGIN * required

        if next_cue is None or ToMilliseconds(next_cue.start) >= ToMilliseconds(new_end + self.gap):
            cue.end = new_end
            issue.fix = FIXED

        elif ToMilliseconds(next_cue.start - self.gap) > ToMilliseconds(cue.end):
            cue.end = next_cue.start - self.gap
            issue.fix = PARTIALLY_FIXED

        else:
            issue.fix = CANNOT_FIX

        issue.new_duration = cue.duration
