"""
Batch consistency checks.

A mosaic is only meaningful if every exposure shares the same plate
scale and (nearly) the same position angle. A disagreement rejects the
whole batch; outliers are never dropped silently.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
import structlog

from osiris_mosaic.errors import (
    InconsistentHeadersError,
    InsufficientDataError,
    MalformedInputError,
    OffsetError,
)

logger = structlog.get_logger(__name__)


def require_consistent(
    values: Iterable[float],
    what: str,
    *,
    tolerance: float = 0.0,
    error: type[OffsetError] = InconsistentHeadersError,
) -> float:
    """Check that every value agrees with the first one.

    Args:
        values: Per-exposure values, reference first
        what: Name of the quantity, used in the error message
        tolerance: Largest allowed absolute difference; 0 requires
            bit-identical values
        error: Exception class raised on disagreement

    Returns:
        The reference (first) value

    Raises:
        InsufficientDataError: If no values are given
        MalformedInputError: If the values are not finite numbers
        error: If any value differs from the reference by more than
            the tolerance
    """
    try:
        arr = np.asarray(list(values), dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"Non-numeric {what} in headers: {e}") from e

    if arr.size == 0:
        raise InsufficientDataError(f"No {what} values to compare")
    if not np.all(np.isfinite(arr)):
        raise MalformedInputError(f"Non-finite {what} in headers")

    reference = arr[0]
    if tolerance == 0.0:
        consistent = bool(np.all(arr == reference))
    else:
        consistent = bool(np.all(np.abs(arr - reference) <= tolerance))

    if not consistent:
        spread = float(np.max(np.abs(arr - reference)))
        logger.warning(
            "inconsistent_batch",
            quantity=what,
            spread=spread,
            tolerance=tolerance,
        )
        raise error(
            f"{what} differs across the batch (max deviation {spread:.6g}, "
            f"tolerance {tolerance:.6g})"
        )

    return float(reference)
