from __future__ import annotations
from bisect import insort
from dataclasses import dataclass

from PySrtLab.SubtitleCue import SubtitleCue

PLACEHOLDER_TEXT = "NEW SUB\n"

@dataclass
class IndexInsertion:
    """Insert a placeholder before the cue with this index in the original file"""
    index : int

@dataclass
class TimeInsertion:
    """
    Insert a cue before the first original cue starting at or after this time.
    If no cue is supplied a placeholder is generated.
    """
    time : float
    cue : SubtitleCue|None = None

class InsertionQueue:
    """
    Pending insertion requests, kept in ascending order of their thresholds.

    Requests are removed as they are drained, so each one fires exactly once.
    Requests with equal thresholds fire in the order they were added.
    """
    def __init__(self, indexes : list[int]|None = None, times : list[float]|None = None):
        self.index_requests : list[IndexInsertion] = []
        self.time_requests : list[TimeInsertion] = []

        for index in indexes or []:
            self.AddIndex(index)

        for time in times or []:
            self.AddTime(time)

    @property
    def pending(self) -> int:
        return len(self.index_requests) + len(self.time_requests)

    def AddIndex(self, index : int) -> None:
        if index < 1:
            raise ValueError(f"Insertion index must be greater than 0, got {index}")
        insort(self.index_requests, IndexInsertion(index), key=lambda request: request.index)

    def AddTime(self, time : float, cue : SubtitleCue|None = None) -> None:
        insort(self.time_requests, TimeInsertion(time, cue), key=lambda request: request.time)

    def DrainIndex(self, index : int) -> list[IndexInsertion]:
        """
        Remove and return the index requests whose threshold has been reached
        """
        drained = []
        while self.index_requests and index >= self.index_requests[0].index:
            drained.append(self.index_requests.pop(0))
        return drained

    def DrainTime(self, start : float) -> list[tuple[TimeInsertion, float]]:
        """
        Remove and return the time requests whose threshold has been reached, each paired with
        the time its placeholder should run until: the next pending threshold or the cue start,
        whichever is earlier.
        """
        drained = []
        while self.time_requests and start >= self.time_requests[0].time:
            request = self.time_requests.pop(0)
            until = start
            if self.time_requests and start > self.time_requests[0].time:
                until = self.time_requests[0].time
            drained.append((request, until))
        return drained

    def DrainRemaining(self) -> tuple[list[IndexInsertion], list[tuple[TimeInsertion, float]]]:
        """
        Remove and return every request still pending when the input is exhausted.
        Time placeholders run until the next threshold, or are zero-length for the last one.
        """
        indexes = self.index_requests
        self.index_requests = []

        times = []
        while self.time_requests:
            request = self.time_requests.pop(0)
            until = self.time_requests[0].time if self.time_requests else request.time
            times.append((request, until))

        return indexes, times
