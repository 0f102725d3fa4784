"""
Value Formatter

Decides how a raw metadata value is displayed: as a number, as text, or as
a length-only placeholder for bulk payloads.
"""

import re
from dataclasses import dataclass
from typing import Union

from models.metadata import XMP_KEY, PROFILE_PREFIX, MAKER_NOTE_MARKER


_INTEGER_PATTERN = re.compile(r'\s*[+-]?\d+\s*')


@dataclass(frozen=True)
class PayloadPlaceholder:
    """
    Stands in for a bulk value (XMP packet, opaque profile, maker note).

    Only the character length of the value is kept.
    """

    length: int

    def __str__(self) -> str:
        return f"<{self.length} characters>"


DisplayValue = Union[int, float, str, PayloadPlaceholder]


class ValueFormatter:
    """
    Formats raw values for line-oriented display.

    Checks, in order: whole-string integer, whole-string float, bulk
    payload key, plain text.

    Example:
        >>> formatter = ValueFormatter()
        >>> formatter.format("EXIF:ISO", "3200")
        3200
        >>> formatter.format("XMP", "<x:xmpmeta ...>")
        PayloadPlaceholder(length=15)
    """

    def __init__(self):
        self.payload_prefix = f"{PROFILE_PREFIX}:"

    def format(self, key: str, value: str) -> DisplayValue:
        """
        Format a single value.

        Args:
            key: Composite key the value was collected under
            value: Raw value text

        Returns:
            int, float, PayloadPlaceholder or the unchanged value
        """
        as_int = self._parse_int(value)
        if as_int is not None:
            return as_int

        as_float = self._parse_float(value)
        if as_float is not None:
            return as_float

        if self.is_payload_key(key):
            return PayloadPlaceholder(length=len(value))

        return value

    def is_payload_key(self, key: str) -> bool:
        return (
            key == XMP_KEY
            or key.startswith(self.payload_prefix)
            or MAKER_NOTE_MARKER in key
        )

    @staticmethod
    def _parse_int(value: str):
        if not _INTEGER_PATTERN.fullmatch(value):
            return None
        # int() refuses digit strings past the interpreter's conversion limit
        try:
            return int(value)
        except ValueError:
            return None

    @staticmethod
    def _parse_float(value: str):
        # float() also accepts digit-group underscores ("1_000")
        if '_' in value:
            return None
        try:
            return float(value)
        except ValueError:
            return None
