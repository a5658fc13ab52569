"""
Header access and FITS header I/O.

- get_keyword(headers, name): values of one keyword across a batch
- read_headers(paths, ext): load exposure headers with astropy
- write_offsets(paths, offsets, ext): store X_OFF / Y_OFF in place
"""

from osiris_mosaic.headers.accessor import (
    HeaderBatch,
    HeaderRecord,
    get_keyword,
    read_headers,
    write_offsets,
)

__all__ = [
    "HeaderBatch",
    "HeaderRecord",
    "get_keyword",
    "read_headers",
    "write_offsets",
]
