from enum import IntEnum

from pngglitch.parsers.png_error import InvalidFilterType


class FilterType(IntEnum):
    """Filter tag stored in the first byte of every scan line."""

    NONE = 0
    SUB = 1
    UP = 2
    AVERAGE = 3
    PAETH = 4

    @classmethod
    def is_valid(cls, code):
        return code in cls._value2member_map_

    @classmethod
    def from_code(cls, code):
        if not cls.is_valid(code):
            raise InvalidFilterType(f"Unknown filter type code {code}")
        return cls(code)

    @classmethod
    def from_name(cls, name):
        try:
            return cls[name.upper()]
        except KeyError:
            raise InvalidFilterType(f"Unknown filter type name {name!r}") from None
