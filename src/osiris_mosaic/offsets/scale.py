"""
Plate scale resolution.

Cube headers carry the nominal spaxel scale (SSCALE); the mosaic needs the
calibrated arcsec/pixel value, which comes from a fixed lookup table.
Imager frames always use the imager plate scale.
"""

from __future__ import annotations

import structlog

from osiris_mosaic.config.settings import OffsetSettings
from osiris_mosaic.errors import UnrecognizedScaleError
from osiris_mosaic.headers.accessor import HeaderBatch, get_keyword
from osiris_mosaic.models.enums import Format
from osiris_mosaic.offsets.validation import require_consistent

logger = structlog.get_logger(__name__)


def lookup_scale(nominal: float, settings: OffsetSettings | None = None) -> float:
    """Map a nominal scale to its calibrated arcsec/pixel value.

    Args:
        nominal: SSCALE header value
        settings: Offset settings holding the scale table

    Returns:
        Calibrated plate scale

    Raises:
        UnrecognizedScaleError: If the nominal scale is not in the table
    """
    settings = settings or OffsetSettings()
    try:
        return settings.scale_table[float(nominal)]
    except KeyError:
        known = ", ".join(f"{k:g}" for k in sorted(settings.scale_table))
        raise UnrecognizedScaleError(
            f"Unrecognized scale {nominal!r}; known scales: {known}"
        ) from None


def resolve_scale(
    headers: HeaderBatch,
    fmt: Format,
    settings: OffsetSettings | None = None,
) -> float:
    """Resolve the single plate scale of a batch.

    Args:
        headers: Batch of exposure headers
        fmt: Data product format
        settings: Offset settings

    Returns:
        Plate scale in arcsec/pixel

    Raises:
        MissingKeywordError: If a cube header lacks the scale keyword
        InconsistentHeadersError: If cube headers disagree on the scale
        UnrecognizedScaleError: If the shared scale is not in the table
    """
    settings = settings or OffsetSettings()

    if fmt is Format.IMAGE:
        logger.debug("scale_resolved", format=fmt.value, scale=settings.image_scale)
        return settings.image_scale

    nominal = require_consistent(
        get_keyword(headers, settings.keywords.scale),
        settings.keywords.scale,
    )
    scale = lookup_scale(nominal, settings)

    logger.debug("scale_resolved", format=fmt.value, nominal=nominal, scale=scale)
    return scale
