from __future__ import annotations
from collections.abc import Mapping
import os

from PySrtLab.Helpers import GetLineEnding
from PySrtLab.SettingsType import SettingType, SettingsType

default_settings : dict[str, SettingType] = {
    # Retiming: new_t = scale * t + offset
    'scale': 1.0,
    'offset': 0.0,
    'autofit': None,            # [ta1, ta2, tb1, tb2]
    'autooffset': None,         # [ta1, ta2]
    'fit_file': None,
    'fit_average': False,

    # Insertions
    'insert_indexes': [],
    'insert_times': [],
    'insert_file': None,

    # Text clean-up
    'fix_ocr': False,
    'hearing_impaired_level': 0,
    'strip_urls': False,
    'strip_whitespace': False,
    'remove_empty': False,

    # Timing checks. The ratios are seconds per character and were tuned for Dutch.
    'check_length': False,
    'fix_length': False,
    'min_ratio': 0.034,
    'stick_ratio': 0.22,
    'min_duration': 0.8,
    'gap': 0.08,

    # Output
    'text_only': False,
    'inplace': False,
    'write_bom': None,
    'output_encoding': None,
    'fallback_encoding': os.getenv('FALLBACK_ENCODING', 'cp1252'),
    'crlf': False,
}

class Options(SettingsType):
    """
    Run configuration for SrtLab. Unspecified settings are assigned default values.
    """
    def __init__(self, settings : Mapping[str, SettingType]|None = None):
        super().__init__(default_settings)
        if settings:
            self.update(settings)

    @property
    def gap(self) -> float:
        return self.get_float('gap') or 0.0

    @property
    def line_ending(self) -> str:
        return GetLineEnding(self.get_bool('crlf'))

    @property
    def hearing_impaired_level(self) -> int:
        return self.get_int('hearing_impaired_level') or 0

    @property
    def check_length(self) -> bool:
        return self.get_bool('check_length') or self.get_bool('fix_length')
