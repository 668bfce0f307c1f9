import os
import logging

from argparse import ArgumentParser, Namespace

from PySrtLab import init_options
from PySrtLab.Options import Options
from PySrtLab.SubtitleProject import SubtitleProject
from PySrtLab.version import __version__

def InitLogger(verbose: bool = False, debug: bool = False) -> None:
    """ Initialise the console logger. Diagnostics go to stderr so they never mix with the output. """
    if debug:
        logging_level = logging.DEBUG
    elif verbose:
        logging_level = logging.INFO
    else:
        level_name = os.getenv('LOG_LEVEL', 'WARNING').upper()
        logging_level = getattr(logging, level_name, logging.WARNING)

    logging.basicConfig(format='%(levelname)s: %(message)s', level=logging_level)

    if debug:
        logging.debug("Debug logging enabled")

def CreateArgParser(description : str) -> ArgumentParser:
    """
    Create the argument parser for the srtlab command line
    """
    parser = ArgumentParser(description=description, epilog="Time values must be in the format [-]HH:MM:SS.sss, or a floating-point number of seconds. "
                            "Use --offset=-00:00:01.5 to pass a negative timestamp.")
    parser.add_argument('files', nargs='+', help="Subtitle files. Multiple files are joined, make sure their timestamps do not overlap.")
    parser.add_argument('-e', '--inplace', action='store_true', help="Overwrite the first file instead of printing to stdout (BE CAREFUL!)")
    parser.add_argument('-c', '--clean', action='store_true', help="Remove empty subtitles")
    parser.add_argument('-s', '--scale', type=str, default=None, help="Scale all timestamps by a number or one of NTSCPAL, PALNTSC, NTSCFILM, PALFILM, FILMNTSC, FILMPAL")
    parser.add_argument('-o', '--offset', type=str, default=None, help="Offset all timestamps. Applied after scaling: new time = S*t+O")
    parser.add_argument('-a', '--autofit', nargs=4, metavar=('TA1', 'TA2', 'TB1', 'TB2'), default=None,
                        help="Calculate scale and offset so that TA1 moves to TA2 and TB1 to TB2. Use the earliest and latest subtitles for best accuracy.")
    parser.add_argument('-b', '--autooffset', nargs=2, metavar=('TA1', 'TA2'), default=None, help="Calculate the offset that moves TA1 to TA2")
    parser.add_argument('--fitfile', type=str, default=None, help="File of 'original target' time pairs, one per line, to fit scale and offset by least squares")
    parser.add_argument('--average', action='store_true', help="With --fitfile, only apply the average offset of the pairs")
    parser.add_argument('-i', '--insert-index', dest='insert_index', action='append', type=int, default=None, help="Insert a new subtitle at this index in the original file (repeatable)")
    parser.add_argument('-j', '--insert-time', dest='insert_time', action='append', type=str, default=None, help="Insert a new subtitle at this original time (repeatable)")
    parser.add_argument('--insertfile', type=str, default=None, help="Merge the subtitles from this SRT file, positioned by their start times")
    parser.add_argument('-f', '--fix-ocr', dest='fix_ocr', action='store_true', help="Try to fix common OCR errors (English only)")
    parser.add_argument('-H', dest='hearing_impaired', action='count', default=0, help="Remove annotations for the hearing impaired, e.g. (CLEARS THROAT). Repeat to also remove non-capitalised annotations.")
    parser.add_argument('-U', '--strip-urls', dest='strip_urls', action='store_true', help="Erase all subtitles that contain a URL (combine with -c)")
    parser.add_argument('-w', '--whitespace', action='store_true', help="Strip whitespace from the beginning and end of lines")
    parser.add_argument('-l', '--check-length', dest='check_length', action='store_true', help="Report subtitles that appear too briefly, too long, or overlap")
    parser.add_argument('-L', '--fix-length', dest='fix_length', action='store_true', help="Report and try to repair subtitles that appear too briefly or overlap")
    parser.add_argument('--minratio', type=float, default=None, help="Minimum seconds per character for the length check")
    parser.add_argument('--stickratio', type=float, default=None, help="Seconds per character above which a subtitle longer than 3 seconds is sticky")
    parser.add_argument('--mindur', type=float, default=None, help="Minimum duration in seconds of any subtitle")
    parser.add_argument('--gap', type=float, default=None, help="Gap in seconds to leave before the next subtitle when repairing")
    parser.add_argument('-t', '--text', action='store_true', help="Strip all SRT formatting and only output the text")
    parser.add_argument('-m', '--bom', dest='bom', action='store_const', const=True, default=None, help="Add a BOM to the output if it is Unicode")
    parser.add_argument('-M', '--no-bom', dest='bom', action='store_const', const=False, help="Do not add a BOM (default is the same as the input)")
    parser.add_argument('-u', '--utf8', action='store_true', help="Save output in UTF-8")
    parser.add_argument('--encoding', type=str, default=None, help="Save output in this encoding")
    parser.add_argument('-r', '--crlf', action='store_true', help="Use CRLF line endings")
    parser.add_argument('-v', '--verbose', action='store_true', help="Report progress and ignored lines")
    parser.add_argument('--debug', action='store_true', help="Run with DEBUG log level")
    parser.add_argument('-V', '--version', action='version', version=f"SRTLab {__version__}")
    return parser

def CreateOptions(args: Namespace, **kwargs) -> Options:
    """ Create options from the command line arguments """
    settings = {
        'scale': args.scale,
        'offset': args.offset,
        'autofit': args.autofit,
        'autooffset': args.autooffset,
        'fit_file': args.fitfile,
        'fit_average': args.average,
        'insert_indexes': args.insert_index,
        'insert_times': args.insert_time,
        'insert_file': args.insertfile,
        'fix_ocr': args.fix_ocr,
        'hearing_impaired_level': min(args.hearing_impaired, 2),
        'strip_urls': args.strip_urls,
        'strip_whitespace': args.whitespace,
        'remove_empty': args.clean,
        'check_length': args.check_length or args.fix_length,
        'fix_length': args.fix_length,
        'min_ratio': args.minratio,
        'stick_ratio': args.stickratio,
        'min_duration': args.mindur,
        'gap': args.gap,
        'text_only': args.text,
        'inplace': args.inplace,
        'write_bom': args.bom,
        'output_encoding': args.encoding or ('UTF-8' if args.utf8 else None),
        'crlf': args.crlf,
    }

    settings.update(kwargs)

    return init_options(**settings)

def CreateProject(options : Options, args: Namespace) -> SubtitleProject:
    """
    Load and process the subtitle files named on the command line
    """
    project = SubtitleProject(options)
    project.LoadSubtitles(args.files)
    project.ProcessSubtitles()

    logging.info(f"Processed {len(project.store)} subtitles from {len(args.files)} file(s)")
    return project
