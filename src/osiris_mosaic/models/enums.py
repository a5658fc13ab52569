"""
Enumerated variants selecting the offset conventions.

Mode chooses which header keywords carry the exposure coordinates;
Format chooses the plate scale source and the position angle bias.
"""

from __future__ import annotations

from enum import Enum

from osiris_mosaic.errors import InvalidFormatError, InvalidModeError


class Mode(str, Enum):
    """Coordinate frame of the exposure positions."""

    TELESCOPE = "telescope"
    ADAPTIVE_OPTICS = "ao"

    @classmethod
    def parse(cls, value: Mode | str) -> Mode:
        """Resolve a Mode from an enum member or a case-insensitive name.

        Args:
            value: Mode member, or one of "telescope", "tel", "ao",
                "adaptive_optics"

        Returns:
            Matching Mode

        Raises:
            InvalidModeError: If the value names no known mode
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_")
        try:
            return _MODE_ALIASES[key]
        except KeyError:
            raise InvalidModeError(
                f"Invalid mode {value!r}: expected one of {sorted(_MODE_ALIASES)}"
            ) from None


class Format(str, Enum):
    """Data product the exposures were reduced to."""

    IMAGE = "image"
    CUBE = "cube"

    @classmethod
    def parse(cls, value: Format | str) -> Format:
        """Resolve a Format from an enum member or a case-insensitive name.

        Raises:
            InvalidFormatError: If the value names no known format
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        try:
            return _FORMAT_ALIASES[key]
        except KeyError:
            raise InvalidFormatError(
                f"Invalid format {value!r}: expected one of {sorted(_FORMAT_ALIASES)}"
            ) from None


_MODE_ALIASES: dict[str, Mode] = {
    "telescope": Mode.TELESCOPE,
    "tel": Mode.TELESCOPE,
    "ao": Mode.ADAPTIVE_OPTICS,
    "adaptive_optics": Mode.ADAPTIVE_OPTICS,
}

_FORMAT_ALIASES: dict[str, Format] = {
    "image": Format.IMAGE,
    "imag": Format.IMAGE,
    "cube": Format.CUBE,
}
