"""
Position angle resolution.

The position angle of an exposure is the rotator position minus the
instrument angle, plus a fixed bias for imager frames. All exposures of
a batch must agree to within about one degree; the first exposure's
angle is the reference used for the whole mosaic.
"""

from __future__ import annotations

import numpy as np
import structlog

from osiris_mosaic.config.settings import OffsetSettings
from osiris_mosaic.errors import InconsistentPositionAngleError, MalformedInputError
from osiris_mosaic.headers.accessor import HeaderBatch, get_keyword
from osiris_mosaic.models.enums import Format
from osiris_mosaic.offsets.validation import require_consistent

logger = structlog.get_logger(__name__)


def position_angle_bias(fmt: Format, settings: OffsetSettings | None = None) -> float:
    """Bias added to rotator minus instrument angle, in degrees."""
    settings = settings or OffsetSettings()
    if fmt is Format.CUBE:
        return settings.cube_pa_bias_deg
    return settings.image_pa_bias_deg


def exposure_position_angles(
    headers: HeaderBatch,
    fmt: Format,
    settings: OffsetSettings | None = None,
) -> np.ndarray:
    """Per-exposure position angles in radians.

    Args:
        headers: Batch of exposure headers
        fmt: Data product format (selects the bias)
        settings: Offset settings

    Returns:
        Array of shape (n_sets,)
    """
    settings = settings or OffsetSettings()
    keywords = settings.keywords

    try:
        rotator = np.asarray(get_keyword(headers, keywords.rotator), dtype=np.float64)
        instrument = np.asarray(
            get_keyword(headers, keywords.instrument_angle), dtype=np.float64
        )
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"Non-numeric rotator or instrument angle: {e}") from e

    bias = position_angle_bias(fmt, settings)
    return (rotator - instrument + bias) * np.pi / 180.0


def resolve_position_angle(
    headers: HeaderBatch,
    fmt: Format,
    settings: OffsetSettings | None = None,
) -> float:
    """Resolve the reference position angle of a batch.

    Args:
        headers: Batch of exposure headers
        fmt: Data product format
        settings: Offset settings

    Returns:
        First exposure's position angle in radians

    Raises:
        InconsistentPositionAngleError: If any exposure's angle differs
            from the reference by more than the tolerance
    """
    settings = settings or OffsetSettings()
    angles = exposure_position_angles(headers, fmt, settings)

    reference = require_consistent(
        angles,
        "Position angle",
        tolerance=settings.pa_tolerance,
        error=InconsistentPositionAngleError,
    )

    logger.debug(
        "position_angle_resolved",
        format=fmt.value,
        position_angle=reference,
        degrees=float(np.degrees(reference)),
    )
    return reference
