"""
Mosaic offset determination.

- determine_offsets(): full pipeline from headers to MosaicOffsets
- resolve_scale() / lookup_scale(): calibrated plate scale
- resolve_position_angle(): reference position angle of a batch
- coord2det(): coordinates to rotated detector pixel offsets
- require_consistent(): batch agreement check
"""

from osiris_mosaic.offsets.pipeline import determine_offsets, extract_coordinates
from osiris_mosaic.offsets.position_angle import (
    exposure_position_angles,
    position_angle_bias,
    resolve_position_angle,
)
from osiris_mosaic.offsets.scale import lookup_scale, resolve_scale
from osiris_mosaic.offsets.transform import coord2det
from osiris_mosaic.offsets.validation import require_consistent

__all__ = [
    "coord2det",
    "determine_offsets",
    "exposure_position_angles",
    "extract_coordinates",
    "lookup_scale",
    "position_angle_bias",
    "require_consistent",
    "resolve_position_angle",
    "resolve_scale",
]
