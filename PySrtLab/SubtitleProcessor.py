import logging

from PySrtLab.CueStore import CueStore
from PySrtLab.Options import Options
from PySrtLab.SrtLabResult import SrtLabResult
from PySrtLab.TextTransforms import BuildTextPipeline, TextPass

class SubtitleProcessor:
    """
    Applies the enabled text clean-up passes to every cue
    """
    def __init__(self, options : Options):
        self.passes : list[TextPass] = BuildTextPipeline(options)

    def ProcessCues(self, store : CueStore, result : SrtLabResult) -> None:
        if not self.passes:
            return

        for cue in store:
            for text_pass in self.passes:
                processed = text_pass(cue.text)

                if text_pass.name == 'ocr' and processed != cue.text:
                    result.ocr_fixes += 1
                    logging.info(f"OCR corrected: {processed.rstrip()}")

                cue.text = processed

        if result.ocr_fixes:
            logging.info(f"Fixed {result.ocr_fixes} subtitles with presumed OCR errors")
