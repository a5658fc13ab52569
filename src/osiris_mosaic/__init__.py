"""
OSIRIS Mosaic

Mosaic offset determination for integral-field spectrograph exposures
taken at different pointings, plus pixel quality flag recoding.

Features:
- Batch validation of plate scale and position angle
- Sky coordinate to rotated detector pixel offsets
- FITS header read/write through astropy
- Two-bit / three-bit quality flag codec

Example:
    >>> from osiris_mosaic import determine_offsets, read_headers
    >>>
    >>> headers = read_headers(paths)
    >>> offsets = determine_offsets(headers, "cube", "telescope")
    >>> print(offsets.pairs())

For more information run:
    $ osiris-mosaic --help
"""

__version__ = "1.0.0"

from osiris_mosaic.config.settings import OffsetSettings, Settings, get_settings
from osiris_mosaic.errors import OffsetError
from osiris_mosaic.headers import get_keyword, read_headers, write_offsets
from osiris_mosaic.models import Format, Mode, MosaicOffsets
from osiris_mosaic.offsets import coord2det, determine_offsets
from osiris_mosaic.quality import compress_quality, expand_quality

__all__ = [
    "Format",
    "Mode",
    "MosaicOffsets",
    "OffsetError",
    "OffsetSettings",
    "Settings",
    "__version__",
    "compress_quality",
    "coord2det",
    "determine_offsets",
    "expand_quality",
    "get_keyword",
    "get_settings",
    "read_headers",
    "write_offsets",
]
