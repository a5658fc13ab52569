"""
Header access for exposure batches.

get_keyword() is the only way the offset pipeline reads header values:
it returns the keyword's value from every record in batch order and
never substitutes a default for a missing keyword.

read_headers() and write_offsets() connect the pipeline to FITS files
through astropy.

Example:
    >>> from osiris_mosaic.headers import read_headers, get_keyword
    >>>
    >>> headers = read_headers(sorted(Path("reduced").glob("*.fits")))
    >>> ras = get_keyword(headers, "RA")
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from astropy.io import fits

from osiris_mosaic.errors import MissingKeywordError, ShapeMismatchError

if TYPE_CHECKING:
    from osiris_mosaic.config.settings import KeywordSettings
    from osiris_mosaic.models.offsets import MosaicOffsets

logger = structlog.get_logger(__name__)

HeaderRecord = Mapping[str, Any]
HeaderBatch = Sequence[HeaderRecord]


def get_keyword(headers: HeaderBatch, name: str) -> list[Any]:
    """Return the value of a keyword from every header, in order.

    Args:
        headers: Batch of header records
        name: Keyword to read

    Returns:
        One value per record

    Raises:
        MissingKeywordError: If any record lacks the keyword
    """
    values = []
    for index, header in enumerate(headers):
        if name not in header:
            raise MissingKeywordError(name, index)
        values.append(header[name])
    return values


def read_headers(
    paths: Sequence[str | Path],
    ext: int = 0,
) -> list[dict[str, Any]]:
    """Read one header per FITS file.

    Args:
        paths: Ordered FITS file paths, reference exposure first
        ext: HDU index holding the exposure header

    Returns:
        List of header dicts in the order of paths
    """
    headers: list[dict[str, Any]] = []

    for path in paths:
        with fits.open(path) as hdul:
            headers.append(dict(hdul[ext].header))

    logger.debug("headers_read", count=len(headers), ext=ext)
    return headers


def write_offsets(
    paths: Sequence[str | Path],
    offsets: MosaicOffsets,
    ext: int = 0,
    keywords: KeywordSettings | None = None,
) -> None:
    """Store each exposure's offset in its FITS header, in place.

    Args:
        paths: FITS files in the same order the offsets were computed
        offsets: Pipeline result
        ext: HDU index receiving the keywords
        keywords: Keyword names (defaults to X_OFF / Y_OFF)

    Raises:
        ShapeMismatchError: If the file count differs from the offset count
    """
    if len(paths) != len(offsets):
        raise ShapeMismatchError(
            f"{len(paths)} files given for {len(offsets)} offsets"
        )

    x_key = keywords.x_offset if keywords else "X_OFF"
    y_key = keywords.y_offset if keywords else "Y_OFF"

    for path, (dx, dy) in zip(paths, offsets.pairs()):
        with fits.open(path, mode="update") as hdul:
            header = hdul[ext].header
            header[x_key] = (dx, "Mosaic X offset (pixels)")
            header[y_key] = (dy, "Mosaic Y offset (pixels)")

    logger.info("offsets_written", count=len(paths), x_key=x_key, y_key=y_key)
