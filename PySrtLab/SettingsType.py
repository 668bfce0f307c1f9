from __future__ import annotations
from collections.abc import Mapping
from typing import Any, TypeAlias

import regex

from PySrtLab.Helpers.Time import ParseTimestamp
from PySrtLab.SubtitleError import TimestampFormatError

BasicType: TypeAlias = str | int | float | bool | list[str] | list[int] | list[float] | None
SettingType: TypeAlias = BasicType | dict[str, 'SettingType']

class SettingsError(Exception):
    """Raised when a setting cannot be coerced to the expected type."""
    pass

class SettingsType(dict[str, SettingType]):
    """
    Settings dictionary with restricted range of types allowed and type-safe getters
    """
    def __init__(self, settings : Mapping[str,SettingType]|None = None):
        if not isinstance(settings, SettingsType):
            settings = dict(settings or {})
        super().__init__(settings)

    def get_bool(self, key: str, default: bool|None = False) -> bool:
        """Get a boolean setting with type safety"""
        value = self.get(key, default)
        if value is None:
            return False

        if isinstance(value, bool):
            return value
        elif isinstance(value, int):
            return value != 0
        elif isinstance(value, str):
            lower_val = value.lower()
            if lower_val in ('true', 'yes', '1'):
                return True
            elif lower_val in ('false', 'no', '0'):
                return False

        raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to bool")

    def get_tristate(self, key: str) -> bool|None:
        """Get a setting that is explicitly on, explicitly off, or unset (None)"""
        if self.get(key) is None:
            return None
        return self.get_bool(key)

    def get_int(self, key: str, default: int|None = None) -> int|None:
        """Get an integer setting with type safety"""
        value = self.get(key, default)
        if value is None:
            return None

        if isinstance(value, (int,float)):
            return int(value)
        elif isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                pass

        raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to int")

    def get_float(self, key: str, default: float|None = None) -> float|None:
        """Get a float setting with type safety"""
        value = self.get(key, default)
        if value is None:
            return None

        if isinstance(value, (int, float)):
            return float(value)
        elif isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                pass

        raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to float")

    def get_str(self, key: str, default: str|None = None) -> str|None:
        """Get a string setting with type safety"""
        value = self.get(key, default)
        if value is None:
            return None
        elif isinstance(value, str):
            return value
        elif isinstance(value, (int, float, bool)):
            return str(value)
        elif isinstance(value, list):
            return ', '.join(str(v) for v in value)

        return str(value)

    def get_seconds(self, key: str, default: float|None = None) -> float|None:
        """Get a time setting given as seconds or as a [-]HH:MM:SS.sss timestamp"""
        value = self.get(key, default)
        if value is None:
            return None

        try:
            if isinstance(value, (int, float, str)) and not isinstance(value, bool):
                return ParseTimestamp(value)
        except TimestampFormatError as e:
            raise SettingsError(f"Setting '{key}': {e.message}") from e

        raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to a time")

    def get_seconds_list(self, key: str) -> list[float]:
        """Get a list of time values, each given as seconds or a timestamp"""
        value = self.get(key)
        if isinstance(value, str):
            # Commas are decimal separators in SRT timestamps, so only split on semicolons and whitespace
            values = [ v for v in regex.split(r'[;\s]+', value) if v ]
        else:
            values = self.get_list(key)

        try:
            return [ ParseTimestamp(value) for value in values ]
        except TimestampFormatError as e:
            raise SettingsError(f"Setting '{key}': {e.message}") from e

    def get_list(self, key: str, default: list[Any]|None = None) -> list[Any]:
        """Get a list setting with type safety"""
        value = self.get(key, default)
        if value is None:
            return []

        if isinstance(value, list):
            return value
        elif isinstance(value, (tuple, set)):
            return list(value)
        elif isinstance(value, str):
            # Try to split string by common separators
            values = regex.split(r'[;,]', value)
            return [ v.strip() for v in values if v.strip() ]

        raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} to list")

    def set(self, setting: str, value: Any) -> None:
        """Set a setting in the settings dictionary"""
        self[setting] = value

    def update(self, other=(), /, **kwds) -> None:
        """Update settings, filtering out None values"""
        # Match dict.update signature: update([other,] **kwds)
        if hasattr(other, 'items'):
            if isinstance(other, SettingsType):
                other = dict(other)
            # Filter None values for our settings
            if isinstance(other, dict):
                other = {k: v for k, v in other.items() if v is not None}
        kwds = {k: v for k, v in kwds.items() if v is not None}
        super().update(other, **kwds)
