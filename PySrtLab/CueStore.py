from __future__ import annotations
from collections.abc import Iterator

from PySrtLab.SubtitleCue import SubtitleCue

class CueStore:
    """
    Ordered collection of cues in the order they were parsed or inserted.

    The store is never sorted by time; its position is the only identity a cue has.
    """
    def __init__(self, cues : list[SubtitleCue]|None = None):
        self.cues : list[SubtitleCue] = cues or []

    @property
    def last_end(self) -> float:
        """End time of the most recently added cue, or 0 if the store is empty"""
        return self.cues[-1].end if self.cues else 0.0

    def Append(self, cue : SubtitleCue) -> SubtitleCue:
        self.cues.append(cue)
        return cue

    def Next(self, position : int) -> SubtitleCue|None:
        """The cue stored after the given position, if there is one"""
        return self.cues[position + 1] if position + 1 < len(self.cues) else None

    def __iter__(self) -> Iterator[SubtitleCue]:
        return iter(self.cues)

    def __len__(self) -> int:
        return len(self.cues)

    def __getitem__(self, position : int) -> SubtitleCue:
        return self.cues[position]
