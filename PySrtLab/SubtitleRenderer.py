import logging

import regex

from PySrtLab.CueStore import CueStore
from PySrtLab.Options import Options
from PySrtLab.SrtLabResult import SrtLabResult
from PySrtLab.SubtitleCue import SubtitleCue

BOM = '\ufeff'

# Nothing but blank lines, optionally wrapped in a single empty formatting tag such as <i></i>
_empty_text = regex.compile(r"^(<.>\n*</.>)?\n*$")

def IsEmptyCue(cue : SubtitleCue) -> bool:
    """
    True if the cue has no visible text. Whitespace is visible: only blank lines count as empty.
    """
    return bool(_empty_text.match(cue.text))

def ShouldWriteBom(charset : str, write_bom : bool|None, input_has_bom : bool|None) -> bool:
    """
    A BOM is only written for Unicode output. If write_bom is None, follow the input.
    """
    if not charset.upper().startswith('UTF-'):
        return False

    if write_bom is None:
        return bool(input_has_bom)

    return write_bom

class SubtitleRenderer:
    """
    Serialises cues as SRT, or as plain text in text-only mode
    """
    def __init__(self, options : Options):
        self.line_ending : str = options.line_ending
        self.text_only : bool = options.get_bool('text_only')
        self.remove_empty : bool = options.get_bool('remove_empty')

    def IsSkipped(self, cue : SubtitleCue) -> bool:
        return self.remove_empty and IsEmptyCue(cue)

    def Compose(self, store : CueStore, result : SrtLabResult|None = None) -> str:
        """
        Render the cues, numbering them sequentially from 1 and skipping empty cues if requested
        """
        output : list[str] = []
        cleaned = 0
        index = 1

        for cue in store:
            if self.IsSkipped(cue):
                cleaned += 1
                continue

            if self.text_only:
                output.append(f"{cue.text}\n")
            else:
                output.append(f"{index}\n{cue.srt_start} --> {cue.srt_end}\n{cue.text}\n")

            index += 1

        if self.remove_empty:
            logging.info(f"Removed {cleaned} empty subtitles")

        if result is not None:
            result.cleaned = cleaned

        content = ''.join(output)
        if self.line_ending != '\n':
            content = content.replace('\n', self.line_ending)

        return content
