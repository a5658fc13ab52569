"""
Coordinate to detector offset transform.

Converts absolute exposure coordinates into pixel offsets relative to
the first exposure. In telescope mode the coordinates are RA/Dec in
degrees; the offsets use the small-angle tangent-plane approximation and
are rotated into the detector frame by the position angle with the sign
convention the mosaic assembler expects:

    x = -(dra * sin(PA) + ddec * cos(PA))
    y =   dra * cos(PA) - ddec * sin(PA)

Adaptive optics mode has no calibrated mirror transform and is rejected.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from osiris_mosaic.errors import MalformedInputError, ModeNotImplementedError
from osiris_mosaic.models.enums import Mode

ARCSEC_PER_DEGREE = 3600.0


def _check_coordinates(coords: npt.ArrayLike) -> np.ndarray:
    try:
        arr = np.asarray(coords, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"Coordinates are not numeric: {e}") from e

    if arr.ndim != 2 or arr.shape[0] != 2:
        raise MalformedInputError(
            f"Coordinates must have shape (2, n), got {arr.shape}"
        )
    if arr.shape[1] < 2:
        raise MalformedInputError(
            f"At least 2 exposures are needed, got {arr.shape[1]}"
        )
    return arr


def _telescope_offsets(
    coords: np.ndarray,
    scale: float,
    position_angle: float,
) -> np.ndarray:
    ra, dec = coords

    ddec = (dec[0] - dec) * ARCSEC_PER_DEGREE / scale
    dra = (ra[0] - ra) * ARCSEC_PER_DEGREE / scale * np.cos(dec * np.pi / 180.0)

    sin_pa = np.sin(position_angle)
    cos_pa = np.cos(position_angle)

    x = -(dra * sin_pa + ddec * cos_pa)
    y = dra * cos_pa - ddec * sin_pa

    # adding +0.0 turns -0.0 into 0.0 so the reference column is exactly (0, 0)
    return np.stack([x, y]) + 0.0


def coord2det(
    coords: npt.ArrayLike,
    mode: Mode | str,
    scale: float,
    position_angle: float,
) -> np.ndarray:
    """Convert exposure coordinates to detector pixel offsets.

    Args:
        coords: (2, n) array; row 0 is RA and row 1 is Dec in degrees
            for telescope mode. Column 0 is the reference exposure.
        mode: Coordinate mode
        scale: Plate scale in arcsec/pixel
        position_angle: Detector position angle in radians

    Returns:
        (2, n) float64 array of (x, y) offsets; column 0 is (0, 0)

    Raises:
        InvalidModeError: If mode names no known mode
        MalformedInputError: If coords is not (2, n) with n >= 2, or the
            scale is not a positive finite number
        ModeNotImplementedError: For adaptive optics mode
    """
    mode = Mode.parse(mode)
    arr = _check_coordinates(coords)

    try:
        scale = float(scale)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"Plate scale is not numeric: {scale!r}") from e
    if not np.isfinite(scale) or scale <= 0:
        raise MalformedInputError(f"Plate scale must be positive, got {scale!r}")

    if mode is Mode.ADAPTIVE_OPTICS:
        # TODO: needs the AO tip-tilt stage to detector calibration
        raise ModeNotImplementedError(
            "Offsets from adaptive optics mirror coordinates are not implemented"
        )

    return _telescope_offsets(arr, scale, float(position_angle))
