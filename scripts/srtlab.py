import logging
import sys

from scripts.check_imports import check_required_imports
check_required_imports({ 'PySrtLab': 'srtlab', 'srt': 'srt', 'regex': 'regex', 'chardet': 'chardet' })

from scripts.srtlab_common import (
    InitLogger,
    CreateArgParser,
    CreateOptions,
    CreateProject,
)

from PySrtLab.SettingsType import SettingsError
from PySrtLab.SubtitleError import LinearFitError, SubtitleError, SubtitleParseError, TimestampFormatError

def main(argv : list[str]|None = None) -> int:
    parser = CreateArgParser("SRT file editing tool")
    args = parser.parse_args(argv)

    InitLogger(args.verbose, args.debug)

    try:
        options = CreateOptions(args)
        project = CreateProject(options, args)
        project.SaveOutput()

    except (SettingsError, LinearFitError, TimestampFormatError, OSError) as e:
        logging.error(str(e))
        return 2

    except SubtitleParseError as e:
        logging.error(f"{str(e)}. Aborting.")
        return 1

    except SubtitleError as e:
        logging.error(str(e))
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
