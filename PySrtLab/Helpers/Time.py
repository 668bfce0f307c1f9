import regex

from PySrtLab.SubtitleError import TimestampFormatError

_float_pattern = regex.compile(r"^-?\d*\.?\d+$")
_timestamp_pattern = regex.compile(r"^(?P<sign>-?)(?P<hours>\d\d):(?P<minutes>\d\d):(?P<seconds>\d\d)(?:[,.](?P<fraction>\d+))?$")

def IsFloat(value : str) -> bool:
    """
    True if the value is a plain floating-point number of seconds, e.g. "12.5" or "-3"
    """
    return bool(_float_pattern.match(value))

def IsTimestamp(value : str) -> bool:
    """
    True if the value is a [-]HH:MM:SS[.,]mmm timestamp
    """
    return bool(_timestamp_pattern.match(value))

def ParseTimestamp(value : str|float|int) -> float:
    """
    Convert floating-point seconds or a [-]HH:MM:SS[.,]mmm timestamp to seconds.

    The fractional part may have any number of digits. It is combined with the whole seconds
    as an exact ratio, so values with millisecond precision convert without rounding error.

    Raises TimestampFormatError if the value matches neither form.
    """
    if isinstance(value, (int, float)):
        return float(value)

    value = value.strip()
    if IsFloat(value):
        return float(value)

    match = _timestamp_pattern.match(value)
    if not match:
        raise TimestampFormatError(value)

    whole = int(match.group('seconds')) + 60 * (int(match.group('minutes')) + 60 * int(match.group('hours')))
    fraction = match.group('fraction') or ''
    denominator = 10 ** len(fraction)
    seconds = (whole * denominator + int(fraction or 0)) / denominator

    return -seconds if match.group('sign') else seconds

def FormatTimestamp(seconds : float) -> str:
    """
    Format seconds as [-]HH:MM:SS,mmm, rounded to the nearest millisecond
    """
    total_ms = round(abs(seconds) * 1000)
    sign = '-' if seconds < 0 and total_ms > 0 else ''

    total_seconds, milliseconds = divmod(total_ms, 1000)
    total_minutes, secs = divmod(total_seconds, 60)
    hours, minutes = divmod(total_minutes, 60)

    return f"{sign}{hours:02d}:{minutes:02d}:{secs:02d},{milliseconds:03d}"

def ToMilliseconds(seconds : float) -> int:
    """
    Nearest whole millisecond, for comparisons that should not flicker on floating-point noise
    """
    return round(seconds * 1000)
