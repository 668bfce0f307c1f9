from __future__ import annotations
from collections.abc import Iterable
from dataclasses import dataclass
import logging
import math

import regex

from PySrtLab.Helpers.Time import IsFloat, ParseTimestamp
from PySrtLab.SettingsType import SettingsError
from PySrtLab.SrtLabResult import SrtLabResult
from PySrtLab.SubtitleError import DegenerateInputError, InsufficientDataError, TimestampFormatError

# Frame rates for the named scale ratios, e.g. NTSCPAL = 23.976/25
frame_rates : dict[str, float] = {
    'NTSC': 23.976,
    'PAL': 25.0,
    'FILM': 24.0,
}

_scale_symbol = regex.compile(r"^(NTSC|PAL|FILM)(NTSC|PAL|FILM)$", regex.IGNORECASE)

@dataclass
class LinearTransform:
    """
    Maps an original time to a new time: new_t = scale * old_t + offset
    """
    scale : float = 1.0
    offset : float = 0.0

    def __post_init__(self):
        if not math.isfinite(self.scale) or not math.isfinite(self.offset):
            raise DegenerateInputError(f"Scale and offset must be finite (scale={self.scale}, offset={self.offset})")

    @property
    def is_identity(self) -> bool:
        return self.scale == 1.0 and self.offset == 0.0

    def Apply(self, time : float) -> float:
        return self.scale * time + self.offset

    def __str__(self) -> str:
        return f"scale {self.scale} and offset {self.offset:.3f}"

@dataclass
class LeastSquaresFit:
    """
    Result of fitting reference time pairs: the mean shift, and the drift-correcting line
    """
    average_offset : float
    scale : float
    offset : float

    def AsTransform(self, average : bool = False) -> LinearTransform:
        if average:
            return LinearTransform(1.0, self.average_offset)
        return LinearTransform(self.scale, self.offset)

def FromTwoPairs(ta1 : float, ta2 : float, tb1 : float, tb2 : float) -> LinearTransform:
    """
    Solve ta1*scale + offset = ta2 and tb1*scale + offset = tb2.

    ta1 and tb1 are the times at which two subtitles appear in the source,
    ta2 and tb2 the times at which they should appear in the output.
    """
    if ta1 == tb1:
        raise DegenerateInputError(f"Reference times must differ to calculate a scale (both are {ta1})")

    scale = (ta2 - tb2) / (ta1 - tb1)
    offset = (tb2 * ta1 - ta2 * tb1) / (ta1 - tb1)
    return LinearTransform(scale, offset)

def FromOnePair(ta1 : float, ta2 : float) -> LinearTransform:
    """
    Offset-only transform that moves ta1 to ta2
    """
    return LinearTransform(1.0, ta2 - ta1)

def LeastSquares(pairs : Iterable[tuple[float, float]]) -> LeastSquaresFit:
    """
    Ordinary least-squares fit of y = scale*x + offset through (x, y) pairs,
    along with the plain average of y - x.
    """
    pairs = list(pairs)
    n = len(pairs)
    if n < 2:
        raise InsufficientDataError(f"At least 2 time pairs are needed for a fit, got {n}")

    mean_x = sum(x for x, _ in pairs) / n
    mean_y = sum(y for _, y in pairs) / n
    mean_xy = sum(x * y for x, y in pairs) / n
    mean_xx = sum(x * x for x, _ in pairs) / n

    variance = mean_xx - mean_x * mean_x
    if variance == 0:
        raise DegenerateInputError("All reference times are identical, cannot calculate a scale")

    scale = (mean_xy - mean_x * mean_y) / variance
    offset = mean_y - scale * mean_x
    average_offset = sum(y - x for x, y in pairs) / n

    return LeastSquaresFit(average_offset, scale, offset)

def ParseTimePairs(lines : Iterable[str], result : SrtLabResult|None = None) -> list[tuple[float, float]]:
    """
    Read whitespace-separated (original, target) timestamp pairs, one pair per line.
    Malformed lines are skipped with a warning. Blank lines and # comments are ignored.
    """
    pairs = []
    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith('#'):
            continue

        fields = line.split()
        try:
            if len(fields) != 2:
                raise ValueError(f"expected 2 values, found {len(fields)}")
            pairs.append((ParseTimestamp(fields[0]), ParseTimestamp(fields[1])))

        except (TimestampFormatError, ValueError) as e:
            message = f"Ignoring malformed time pair on line {line_number} `{line}': {e}"
            logging.warning(message)
            if result is not None:
                result.pair_warnings.append(message)

    return pairs

def ParseScale(value : str|float) -> float:
    """
    Parse a non-negative scale factor or a frame-rate conversion symbol such as NTSCPAL
    """
    if isinstance(value, (int, float)):
        scale = float(value)
    elif IsFloat(value.strip()):
        scale = float(value)
    else:
        match = _scale_symbol.match(value.strip())
        if not match or match.group(1).upper() == match.group(2).upper():
            raise SettingsError(f"Scale must be a positive floating-point number or a supported symbol, got '{value}'")
        source, target = match.group(1).upper(), match.group(2).upper()
        scale = frame_rates[source] / frame_rates[target]

    if scale < 0 or not math.isfinite(scale):
        raise SettingsError(f"Scale must be a positive floating-point number or a supported symbol, got '{value}'")

    return scale
