"""
Pixel quality bit codec.

Reduced frames flag each pixel with three quality bits:

    bit0  GOOD                    pixel is usable
    bit1  INTERPOLATED            pixel value was interpolated
    bit2  INTERPOLATION_GOOD      the interpolation is trusted

compress_quality() folds these into a two-bit form and expand_quality()
restores the three-bit form. Both are pure table lookups applied to the
low three bits of every element; higher bits pass through unchanged.

    state                 3-bit (b2 b1 b0)   2-bit (b1 b0)
    bad                   x x 0              0 0
    good                  x 0 1              1 1
    interpolated, good    1 1 1              1 0
    interpolated, bad     0 1 1              0 1

Example:
    >>> import numpy as np
    >>> from osiris_mosaic.quality import compress_quality, expand_quality
    >>>
    >>> mask = np.array([0, 1, 3, 7], dtype=np.uint8)
    >>> compress_quality(mask)
    array([0, 3, 1, 2], dtype=uint8)
    >>> expand_quality(compress_quality(mask))
    array([0, 1, 3, 7], dtype=uint8)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from osiris_mosaic.errors import MalformedInputError

GOOD_BIT = 0b001
INTERPOLATED_BIT = 0b010
INTERPOLATION_GOOD_BIT = 0b100

QUALITY_BITS = GOOD_BIT | INTERPOLATED_BIT | INTERPOLATION_GOOD_BIT

# Indexed by the low three bits of the input
COMPRESS_TABLE = np.array([0, 3, 0, 1, 0, 3, 0, 2], dtype=np.int64)

# Indexed by the low two bits of the input; bit2 of the input is ignored
EXPAND_TABLE = np.array([0, 3, 7, 1], dtype=np.int64)


def _as_integer_mask(mask: npt.ArrayLike) -> np.ndarray:
    arr = np.asarray(mask)
    if not np.issubdtype(arr.dtype, np.integer):
        raise MalformedInputError(
            f"Quality mask must have an integer dtype, got {arr.dtype}"
        )
    return arr


def _remap(arr: np.ndarray, table: np.ndarray, low_bits: int) -> np.ndarray:
    # low_bits is the input field read as the table index; all three quality
    # bits are replaced in the output
    index = (arr & low_bits).astype(np.intp)
    preserved = arr - (arr & QUALITY_BITS)
    return (preserved + table[index]).astype(arr.dtype)


def compress_quality(mask: npt.ArrayLike) -> np.ndarray:
    """Fold three-bit quality flags into the two-bit form.

    Args:
        mask: Integer array (or scalar) of quality flags

    Returns:
        New array of the same shape and dtype

    Raises:
        MalformedInputError: If the mask is not an integer array
    """
    arr = _as_integer_mask(mask)
    return _remap(arr, COMPRESS_TABLE, QUALITY_BITS)


def expand_quality(mask: npt.ArrayLike) -> np.ndarray:
    """Restore three-bit quality flags from the two-bit form.

    Args:
        mask: Integer array (or scalar) of two-bit quality flags

    Returns:
        New array of the same shape and dtype

    Raises:
        MalformedInputError: If the mask is not an integer array
    """
    arr = _as_integer_mask(mask)
    return _remap(arr, EXPAND_TABLE, GOOD_BIT | INTERPOLATED_BIT)
