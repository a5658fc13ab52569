"""
Offset determination pipeline.

determine_offsets() turns a batch of exposure headers into the pixel
offsets that register the exposures onto the first one:

    headers -> validated scale / position angle -> coordinates -> offsets

Every check fails fast with a typed OffsetError; nothing is written back
to the headers here (see osiris_mosaic.headers.write_offsets).

Example:
    >>> from osiris_mosaic.headers import read_headers
    >>> from osiris_mosaic.offsets import determine_offsets
    >>>
    >>> headers = read_headers(paths)
    >>> offsets = determine_offsets(headers, "cube", "telescope")
    >>> offsets.pairs()[0]
    (0.0, 0.0)
"""

from __future__ import annotations

import numpy as np
import structlog

from osiris_mosaic.config.settings import OffsetSettings
from osiris_mosaic.errors import (
    InsufficientDataError,
    MalformedInputError,
    ShapeMismatchError,
    TransformFailedError,
)
from osiris_mosaic.headers.accessor import HeaderBatch, get_keyword
from osiris_mosaic.models.enums import Format, Mode
from osiris_mosaic.models.offsets import MosaicOffsets
from osiris_mosaic.offsets.position_angle import resolve_position_angle
from osiris_mosaic.offsets.scale import resolve_scale
from osiris_mosaic.offsets.transform import coord2det

logger = structlog.get_logger(__name__)


def _coordinate_keywords(mode: Mode, settings: OffsetSettings) -> tuple[str, str]:
    if mode is Mode.TELESCOPE:
        return settings.keywords.ra, settings.keywords.dec
    return settings.keywords.ao_x, settings.keywords.ao_y


def extract_coordinates(
    headers: HeaderBatch,
    mode: Mode,
    settings: OffsetSettings | None = None,
) -> np.ndarray:
    """Read the per-exposure coordinate pairs for a mode.

    Args:
        headers: Batch of exposure headers
        mode: Coordinate mode selecting the keywords
        settings: Offset settings

    Returns:
        (2, n_sets) float64 array

    Raises:
        MissingKeywordError: If a record lacks a coordinate keyword
        ShapeMismatchError: If the coordinate sequences differ in length
            from each other or from the batch
    """
    settings = settings or OffsetSettings()
    x_key, y_key = _coordinate_keywords(mode, settings)

    xs = get_keyword(headers, x_key)
    ys = get_keyword(headers, y_key)

    if len(xs) != len(ys) or len(xs) != len(headers):
        raise ShapeMismatchError(
            f"{x_key} has {len(xs)} values and {y_key} has {len(ys)} "
            f"for {len(headers)} headers"
        )

    try:
        return np.array([xs, ys], dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"Non-numeric {x_key}/{y_key} values: {e}") from e


def _check_result(result: object, coords: np.ndarray) -> np.ndarray:
    if not isinstance(result, np.ndarray) or result.shape != coords.shape:
        raise TransformFailedError(
            f"Transform returned {type(result).__name__} "
            f"with shape {getattr(result, 'shape', None)}, expected {coords.shape}"
        )
    if not np.issubdtype(result.dtype, np.floating) or not np.all(np.isfinite(result)):
        raise TransformFailedError("Transform produced non-finite offsets")
    return result


def determine_offsets(
    headers: HeaderBatch,
    fmt: Format | str,
    mode: Mode | str,
    skip_position_angle: bool = False,
    *,
    n_sets: int | None = None,
    settings: OffsetSettings | None = None,
) -> MosaicOffsets:
    """Compute mosaic pixel offsets for a batch of exposures.

    Args:
        headers: Exposure headers, reference exposure first
        fmt: Data product format ("image" or "cube")
        mode: Coordinate mode ("telescope" or "ao")
        skip_position_angle: Force the position angle to 0 instead of
            reading and validating it
        n_sets: Expected number of exposures, checked against the batch
        settings: Offset settings (defaults when omitted)

    Returns:
        MosaicOffsets with one (dx, dy) per header; the first is (0, 0)

    Raises:
        InvalidModeError: Unknown mode
        InvalidFormatError: Unknown format
        InsufficientDataError: Fewer than two headers
        InconsistentHeadersError: Cube scales differ across the batch
        UnrecognizedScaleError: Scale missing from the scale table
        InconsistentPositionAngleError: Position angles disagree
        MissingKeywordError: A header lacks a required keyword
        ShapeMismatchError: Coordinate or count mismatch
        MalformedInputError: Non-numeric header values
        TransformFailedError: Transform output is not a valid matrix
        ModeNotImplementedError: Adaptive optics mode requested
    """
    settings = settings or OffsetSettings()

    mode = Mode.parse(mode)
    fmt = Format.parse(fmt)

    if len(headers) < settings.min_exposures:
        raise InsufficientDataError(
            f"Need at least {settings.min_exposures} exposures to determine "
            f"offsets, got {len(headers)}"
        )
    if n_sets is not None and n_sets != len(headers):
        raise ShapeMismatchError(f"Expected {n_sets} exposures, got {len(headers)}")

    log = logger.bind(n_sets=len(headers), format=fmt.value, mode=mode.value)

    scale = resolve_scale(headers, fmt, settings)

    if skip_position_angle:
        position_angle = 0.0
        log.debug("position_angle_skipped")
    else:
        position_angle = resolve_position_angle(headers, fmt, settings)

    coords = extract_coordinates(headers, mode, settings)
    result = _check_result(coord2det(coords, mode, scale, position_angle), coords)

    offsets = MosaicOffsets.from_array(
        result,
        scale=scale,
        position_angle=position_angle,
        format=fmt,
        mode=mode,
    )

    log.info(
        "offsets_determined",
        scale=scale,
        position_angle=position_angle,
        max_offset=float(np.max(np.abs(result))),
    )
    return offsets
