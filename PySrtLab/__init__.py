"""
PySrtLab - SubRip subtitle editing library

Retime, repair and clean up .srt files.

Basic Usage
-----------

# Configure options
opts = init_options(
        scale="NTSCPAL",
        offset="00:00:02,500",
        fix_ocr=True,
        hearing_impaired_level=1,
        remove_empty=True,
        fix_length=True,
    )

# Join, process and render one or more subtitle files
output, result = process_subtitles(["part1.srt", "part2.srt"], options=opts)

# Inspect what was changed or reported
print(result.ocr_fixes, len(result.timing_issues))
"""
from __future__ import annotations

from PySrtLab.CueStore import CueStore
from PySrtLab.EncodingSniffer import ChardetSniffer, EncodingInfo, EncodingSniffer
from PySrtLab.InsertionQueue import InsertionQueue
from PySrtLab.LinearTransform import FromOnePair, FromTwoPairs, LeastSquares, LinearTransform
from PySrtLab.Options import Options
from PySrtLab.SettingsType import SettingType, SettingsError, SettingsType
from PySrtLab.SrtLabResult import SrtLabResult
from PySrtLab.SubtitleCue import SubtitleCue
from PySrtLab.SubtitleError import SubtitleError
from PySrtLab.SubtitleFileHandler import SubtitleFileHandler
from PySrtLab.SubtitleParser import SubtitleParser
from PySrtLab.SubtitleProject import CreateTransform, SubtitleProject
from PySrtLab.version import __version__


def init_options(**settings: SettingType) -> Options:
    """
    Create and return an :class:`Options` instance for a run.

    Parameters
    ----------
    **settings : SettingType
        Keyword settings, e.g. scale=1.001, offset="-00:00:01.5", fix_ocr=True.
        See :mod:`PySrtLab.Options` for the available settings and their defaults.

    Returns
    -------
    Options
        An Options instance with the specified configuration.
    """
    return Options(SettingsType(settings))

def init_transform(options : Options|SettingsType|None = None) -> LinearTransform:
    """
    Build the :class:`LinearTransform` described by the options: an explicit scale and offset,
    or a fit from reference times.
    """
    return CreateTransform(_as_options(options))

def init_project(options : Options|SettingsType|None = None, sniffer : EncodingSniffer|None = None) -> SubtitleProject:
    """
    Create a :class:`SubtitleProject` for a run, optionally with a custom encoding sniffer.
    """
    return SubtitleProject(_as_options(options), SubtitleFileHandler(sniffer))

def process_subtitles(filepaths : list[str], *, options : Options|SettingsType|None = None) -> tuple[str, SrtLabResult]:
    """
    Load, process and render subtitle files.

    Parameters
    ----------
    filepaths : list[str]
        Subtitle files to join, in order.

    options : Options or SettingsType, optional
        Settings for the run.

    Returns
    -------
    tuple[str, SrtLabResult]
        The rendered output and the diagnostics collected during the run.
    """
    project = init_project(options)
    project.LoadSubtitles(filepaths)
    project.ProcessSubtitles()
    return project.ComposeOutput(), project.result

def process_string(content : str, *, options : Options|SettingsType|None = None) -> tuple[str, SrtLabResult]:
    """
    Process subtitle content that has already been decoded.
    """
    project = init_project(options)
    project.LoadSubtitlesFromString(content)
    project.ProcessSubtitles()
    return project.ComposeOutput(), project.result

def _as_options(options : Options|SettingsType|None) -> Options:
    if isinstance(options, Options):
        return options
    return Options(options)

__all__ = [
    'ChardetSniffer',
    'CueStore',
    'EncodingInfo',
    'EncodingSniffer',
    'FromOnePair',
    'FromTwoPairs',
    'InsertionQueue',
    'LeastSquares',
    'LinearTransform',
    'Options',
    'SettingsError',
    'SettingsType',
    'SrtLabResult',
    'SubtitleCue',
    'SubtitleError',
    'SubtitleParser',
    'SubtitleProject',
    'init_options',
    'init_transform',
    'init_project',
    'process_subtitles',
    'process_string',
    '__version__',
]
