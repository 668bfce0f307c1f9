from __future__ import annotations
import codecs
import logging

from PySrtLab.CueStore import CueStore
from PySrtLab.EncodingSniffer import EncodingInfo
from PySrtLab.Helpers import GetInputPath
from PySrtLab.InsertionQueue import InsertionQueue
from PySrtLab.LinearTransform import (
    FromOnePair,
    FromTwoPairs,
    LeastSquares,
    LinearTransform,
    ParseScale,
    ParseTimePairs,
)
from PySrtLab.Options import Options
from PySrtLab.SettingsType import SettingsError
from PySrtLab.SrtLabResult import SrtLabResult
from PySrtLab.SubtitleError import SubtitleError
from PySrtLab.SubtitleFileHandler import SubtitleFileHandler
from PySrtLab.SubtitleParser import LoadAuxiliaryCues, SubtitleParser
from PySrtLab.SubtitleProcessor import SubtitleProcessor
from PySrtLab.SubtitleRenderer import ShouldWriteBom, SubtitleRenderer
from PySrtLab.SubtitleValidator import SubtitleValidator

class SubtitleProject:
    """
    A single SrtLab run: load and join subtitle files, clean up and check them, then render the result.
    """
    def __init__(self, options : Options|None = None, file_handler : SubtitleFileHandler|None = None):
        self.options : Options = options or Options()
        self.file_handler : SubtitleFileHandler = file_handler or SubtitleFileHandler()
        self.result : SrtLabResult = SrtLabResult()
        self.sourcepaths : list[str] = []
        self.transform : LinearTransform = LinearTransform()
        self.store : CueStore = CueStore()
        self.renderer : SubtitleRenderer = SubtitleRenderer(self.options)

    @property
    def output_charset(self) -> str:
        """
        The explicit output encoding, or the encoding of the first input. Plain ASCII input is written as UTF-8.
        """
        charset = self.options.get_str('output_encoding')
        if charset:
            try:
                codecs.lookup(charset)
            except LookupError as e:
                raise SettingsError(f"Unknown output encoding '{charset}'") from e
            return charset

        charset = self.result.input_charset
        if not charset or codecs.lookup(charset).name == 'ascii':
            return 'UTF-8'
        return charset

    @property
    def write_bom(self) -> bool:
        return ShouldWriteBom(self.output_charset, self.options.get_tristate('write_bom'), self.result.input_has_bom)

    def InitialiseTransform(self) -> LinearTransform:
        """
        Build the time transform from the scale and offset settings, or fit it from reference times
        """
        self.transform = CreateTransform(self.options, self.file_handler, self.result)
        return self.transform

    def CreateInsertions(self) -> InsertionQueue:
        """
        Queue the insertions requested by index, by time and from an auxiliary subtitle file
        """
        insertions = InsertionQueue()
        for index in self.options.get_list('insert_indexes'):
            try:
                insertions.AddIndex(int(index))
            except ValueError as e:
                raise SettingsError(f"Insertion index must be an integer greater than 0, got '{index}'") from e

        for time in self.options.get_seconds_list('insert_times'):
            insertions.AddTime(time)

        insert_file = GetInputPath(self.options.get_str('insert_file'))
        if insert_file:
            content, _ = self.file_handler.ReadFile(insert_file)
            cues = LoadAuxiliaryCues(content)
            logging.info(f"Loaded {len(cues)} subtitles to insert from {insert_file}")
            for start, cue in cues.items():
                insertions.AddTime(start, cue)

        return insertions

    def LoadSubtitles(self, filepaths : list[str]) -> CueStore:
        """
        Parse the files in order into a single store of cues
        """
        if not filepaths:
            raise SubtitleError("No subtitle files were specified")

        self.InitialiseTransform()
        parser = SubtitleParser(self.transform, self.CreateInsertions(), self.result)

        for filepath in filepaths:
            path = GetInputPath(filepath) or filepath
            content, encoding = self.file_handler.ReadFile(path)
            self._parse_source(parser, content, encoding, path)

        self.store = parser.Finish()
        return self.store

    def LoadSubtitlesFromString(self, content : str, encoding : EncodingInfo|None = None) -> CueStore:
        """
        Parse subtitle content that has already been decoded
        """
        self.InitialiseTransform()
        parser = SubtitleParser(self.transform, self.CreateInsertions(), self.result)
        self._parse_source(parser, content, encoding or EncodingInfo('UTF-8'), None)
        self.store = parser.Finish()
        return self.store

    def ProcessSubtitles(self) -> None:
        """
        Apply text clean-up to every cue, then check timings if requested
        """
        SubtitleProcessor(self.options).ProcessCues(self.store, self.result)

        if self.options.check_length:
            validator = SubtitleValidator(self.options)
            validator.ValidateCues(self.store, self.result, skip=self.renderer.IsSkipped)

    def ComposeOutput(self) -> str:
        return self.renderer.Compose(self.store, self.result)

    def EncodeOutput(self) -> bytes:
        return self.file_handler.Encode(self.ComposeOutput(), self.output_charset, self.write_bom)

    def SaveOutput(self, outputpath : str|None = None) -> None:
        """
        Write the output to a path, over the first input file if editing in place, or to standard output
        """
        if not outputpath and self.options.get_bool('inplace'):
            if not self.sourcepaths:
                raise SubtitleError("In-place editing requires an input file")
            outputpath = self.sourcepaths[0]

        data = self.EncodeOutput()
        self.file_handler.WriteFile(outputpath, data)

        if outputpath:
            logging.info(f"Saved {len(self.store)} subtitles to {outputpath}")

    def _parse_source(self, parser : SubtitleParser, content : str, encoding : EncodingInfo, path : str|None) -> None:
        self.result.encodings.append((path, encoding))
        if path:
            self.sourcepaths.append(path)

        count = len(parser.store)
        parser.ParseString(content, path)
        logging.debug(f"Read {len(parser.store) - count} subtitles from {path or 'input'}")

def CreateTransform(options : Options, file_handler : SubtitleFileHandler|None = None, result : SrtLabResult|None = None) -> LinearTransform:
    """
    Build the time transform from the options.

    A fit from reference times (four-point, two-point or a file of pairs) takes precedence over
    an explicit scale and offset.
    """
    autofit = options.get_seconds_list('autofit')
    autooffset = options.get_seconds_list('autooffset')
    fit_file = GetInputPath(options.get_str('fit_file'))

    if autofit:
        if len(autofit) != 4:
            raise SettingsError("Automatic fit expects four times: Ta1 Ta2 Tb1 Tb2")
        transform = FromTwoPairs(*autofit)
        logging.info(f"Automatically calculated {transform}")

    elif autooffset:
        if len(autooffset) != 2:
            raise SettingsError("Automatic offset expects two times: Ta1 Ta2")
        transform = FromOnePair(*autooffset)
        logging.info(f"Automatically calculated {transform}")

    elif fit_file:
        handler = file_handler or SubtitleFileHandler()
        pairs = ParseTimePairs(handler.ReadText(fit_file).splitlines(), result)
        fit = LeastSquares(pairs)
        transform = fit.AsTransform(options.get_bool('fit_average'))
        logging.info(f"Fitted {len(pairs)} time pairs: average offset {fit.average_offset:.3f}, least squares scale {fit.scale} and offset {fit.offset:.3f}")

    else:
        scale_value = options.get('scale')
        scale = ParseScale(scale_value) if isinstance(scale_value, (str, int, float)) else 1.0
        offset = options.get_seconds('offset') or 0.0
        transform = LinearTransform(scale, offset)
        if not transform.is_identity:
            logging.info(f"Using {transform}")

    return transform
