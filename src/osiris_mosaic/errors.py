"""
Exception hierarchy for the OSIRIS mosaic pipeline.

Every failure of the offset pipeline is raised as a subclass of
OffsetError so callers can tell a rejected batch apart from a valid
offset matrix. Nothing is retried internally: the inputs are
deterministic, so re-running without fixing them reproduces the error.

Taxonomy:
- Caller contract: InvalidModeError, InvalidFormatError, InsufficientDataError
- Batch data quality: InconsistentHeadersError, UnrecognizedScaleError,
  InconsistentPositionAngleError
- Extraction / shape: MissingKeywordError, ShapeMismatchError,
  MalformedInputError, TransformFailedError
- Unsupported: ModeNotImplementedError

Example:
    >>> from osiris_mosaic.errors import OffsetError
    >>>
    >>> try:
    ...     offsets = determine_offsets(headers, "cube", "telescope")
    ... except OffsetError as e:
    ...     print(f"[{e.code}] {e}")
"""

from __future__ import annotations


class OffsetError(Exception):
    """Base class for all offset pipeline failures.

    Attributes:
        code: Stable identifier of the violated invariant
    """

    code: str = "offset_error"


class InvalidModeError(OffsetError, ValueError):
    """Mode is not one of the supported coordinate modes."""

    code = "invalid_mode"


class InvalidFormatError(OffsetError, ValueError):
    """Format is neither image nor cube."""

    code = "invalid_format"


class InsufficientDataError(OffsetError, ValueError):
    """Fewer exposures than needed to define a relative offset."""

    code = "insufficient_data"


class InconsistentHeadersError(OffsetError):
    """A per-exposure value that must be shared by the batch differs."""

    code = "inconsistent_headers"


class UnrecognizedScaleError(OffsetError):
    """Nominal scale has no entry in the calibrated scale table."""

    code = "unrecognized_scale"


class InconsistentPositionAngleError(OffsetError):
    """Position angles across the batch disagree beyond tolerance."""

    code = "inconsistent_position_angle"


class MissingKeywordError(OffsetError, KeyError):
    """A header record lacks a required keyword."""

    code = "missing_keyword"

    def __init__(self, keyword: str, index: int | None = None):
        self.keyword = keyword
        self.index = index
        if index is None:
            message = f"Header keyword {keyword!r} not found"
        else:
            message = f"Header keyword {keyword!r} missing from record {index}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class ShapeMismatchError(OffsetError, ValueError):
    """Coordinate sequences disagree in length with each other or the batch."""

    code = "shape_mismatch"


class MalformedInputError(OffsetError, ValueError):
    """Input array does not have the required shape or dtype."""

    code = "malformed_input"


class TransformFailedError(OffsetError):
    """Transform output is not a finite matrix shaped like its input."""

    code = "transform_failed"


class ModeNotImplementedError(OffsetError, NotImplementedError):
    """The requested mode has no transform available."""

    code = "not_implemented"


__all__ = [
    "InconsistentHeadersError",
    "InconsistentPositionAngleError",
    "InsufficientDataError",
    "InvalidFormatError",
    "InvalidModeError",
    "MalformedInputError",
    "MissingKeywordError",
    "ModeNotImplementedError",
    "OffsetError",
    "ShapeMismatchError",
    "TransformFailedError",
    "UnrecognizedScaleError",
]
