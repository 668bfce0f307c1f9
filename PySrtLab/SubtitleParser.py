from __future__ import annotations
from collections import OrderedDict
from enum import Enum
import logging

import regex
import srt # type: ignore

from PySrtLab.CueStore import CueStore
from PySrtLab.Helpers.Time import ParseTimestamp
from PySrtLab.InsertionQueue import PLACEHOLDER_TEXT, InsertionQueue
from PySrtLab.LinearTransform import LinearTransform
from PySrtLab.SrtLabResult import MalformedLine, SrtLabResult
from PySrtLab.SubtitleCue import SubtitleCue
from PySrtLab.SubtitleError import SubtitleParseError, TooManyMalformedLinesError

# Unrecognised lines tolerated per source before giving up on it
MAX_MALFORMED_LINES = 20

_index_pattern = regex.compile(r"^\s*(\d+)\s*$")
_timing_pattern = regex.compile(r"^\s*(\d\d:\d\d:\d\d[,.]\d+)\s*[-\u2013]{1,2}>\s*(\d\d:\d\d:\d\d[,.]\d+)")

class ParserState(Enum):
    SeekingCue = 0
    InCue = 1

class SubtitleParser:
    """
    Tolerant line-based SRT parser.

    Cues from every source are appended to a single CueStore, with the transform applied to
    their times as they are read. Pending insertion requests are drained into the store as the
    parser reaches their thresholds, so insertions are positioned across the whole concatenated
    input rather than per source.
    """
    def __init__(self, transform : LinearTransform|None = None, insertions : InsertionQueue|None = None, result : SrtLabResult|None = None):
        self.transform : LinearTransform = transform or LinearTransform()
        self.insertions : InsertionQueue = insertions or InsertionQueue()
        self.result : SrtLabResult = result if result is not None else SrtLabResult()
        self.store : CueStore = CueStore()

    def ParseString(self, content : str, source : str|None = None) -> CueStore:
        """
        Parse one source and append its cues to the store.

        Raises TooManyMalformedLinesError if the source contains more than MAX_MALFORMED_LINES
        unrecognised lines outside of cues.
        """
        state = ParserState.SeekingCue
        malformed = 0
        current : SubtitleCue|None = None

        for line_number, line in enumerate(content.split('\n'), start=1):
            line = line.rstrip('\r')
            if line_number == 1:
                line = line.lstrip('\ufeff')

            if state == ParserState.SeekingCue:
                index_match = _index_pattern.match(line)
                timing_match = _timing_pattern.match(line) if not index_match else None

                if index_match:
                    self._insert_by_index(int(index_match.group(1)))

                elif timing_match:
                    start = ParseTimestamp(timing_match.group(1))
                    end = ParseTimestamp(timing_match.group(2))
                    self._insert_by_time(start)
                    current = self.store.Append(SubtitleCue(self.transform.Apply(start), self.transform.Apply(end)))
                    state = ParserState.InCue

                elif line:
                    malformed += 1
                    if malformed > MAX_MALFORMED_LINES:
                        raise TooManyMalformedLinesError(source, malformed)

                    logging.info(f"Ignoring spurious line {line_number} `{line}'")
                    self.result.malformed_lines.append(MalformedLine(source, line_number, line))

            elif state == ParserState.InCue:
                if line == '':
                    state = ParserState.SeekingCue
                elif current is not None:
                    current.AddLine(line)

        return self.store

    def Finish(self) -> CueStore:
        """
        Append any insertions whose thresholds were never reached, in order
        """
        indexes, times = self.insertions.DrainRemaining()
        for _ in indexes:
            self._add_placeholder(self.store.last_end, self.store.last_end)

        for request, until in times:
            self._add_time_insertion(request.time, request.cue, until)

        if indexes or times:
            logging.info(f"Appended {len(indexes) + len(times)} insertions after the last subtitle")

        return self.store

    def _insert_by_index(self, index : int) -> None:
        for _ in self.insertions.DrainIndex(index):
            end = self.store.last_end
            self._add_placeholder(end, end)

    def _insert_by_time(self, start : float) -> None:
        for request, until in self.insertions.DrainTime(start):
            self._add_time_insertion(request.time, request.cue, until)

    def _add_time_insertion(self, time : float, cue : SubtitleCue|None, until : float) -> None:
        if cue is not None:
            self.store.Append(SubtitleCue(self.transform.Apply(cue.start), self.transform.Apply(cue.end), cue.text))
        else:
            self._add_placeholder(self.transform.Apply(time), self.transform.Apply(until))

    def _add_placeholder(self, start : float, end : float) -> None:
        self.store.Append(SubtitleCue(start, end, PLACEHOLDER_TEXT))

def LoadAuxiliaryCues(content : str) -> OrderedDict[float, SubtitleCue]:
    """
    Parse an auxiliary SRT file into cues keyed by their original start time.

    Times are left untransformed; the parser applies the transform when the cues are inserted.
    """
    cues : OrderedDict[float, SubtitleCue] = OrderedDict()
    try:
        for item in srt.parse(content.lstrip('\ufeff')):
            start = item.start.total_seconds()
            text = ''.join(f"{line}\n" for line in item.content.split('\n')) if item.content else ''
            if start in cues:
                logging.warning(f"Auxiliary subtitle {item.index} has the same start time as an earlier subtitle and replaces it")
            cues[start] = SubtitleCue(start, item.end.total_seconds(), text)

    except srt.SRTParseError as e:
        raise SubtitleParseError(f"Failed to parse auxiliary SRT: {str(e)}", e)

    return cues
