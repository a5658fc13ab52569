"""
Data models for the OSIRIS mosaic pipeline.

- Mode: coordinate frame (telescope or adaptive optics)
- Format: data product (image or cube)
- MosaicOffsets: per-exposure pixel offsets with the scale and PA used
"""

from osiris_mosaic.models.enums import Format, Mode
from osiris_mosaic.models.offsets import MosaicOffsets

__all__ = [
    "Format",
    "Mode",
    "MosaicOffsets",
]
