"""
Pixel quality bit recoding.

- compress_quality(): three-bit flags -> two-bit form
- expand_quality(): two-bit form -> three-bit flags
"""

from osiris_mosaic.quality.bits import (
    GOOD_BIT,
    INTERPOLATED_BIT,
    INTERPOLATION_GOOD_BIT,
    compress_quality,
    expand_quality,
)

__all__ = [
    "GOOD_BIT",
    "INTERPOLATED_BIT",
    "INTERPOLATION_GOOD_BIT",
    "compress_quality",
    "expand_quality",
]
