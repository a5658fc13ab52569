"""
Tests for plate scale resolution.
"""

from __future__ import annotations

import pytest

from osiris_mosaic.config import KeywordSettings, OffsetSettings
from osiris_mosaic.errors import (
    InconsistentHeadersError,
    MissingKeywordError,
    UnrecognizedScaleError,
)
from osiris_mosaic.models import Format
from osiris_mosaic.offsets.scale import lookup_scale, resolve_scale


class TestLookupScale:
    """Tests for lookup_scale."""

    @pytest.mark.parametrize(
        "nominal,calibrated",
        [(0.020, 0.0203), (0.035, 0.0350), (0.050, 0.0500), (0.100, 0.1009)],
    )
    def test_table(self, nominal, calibrated):
        """Every table entry maps to its calibrated value."""
        assert lookup_scale(nominal) == calibrated

    def test_string_nominal(self):
        """String header values are converted first."""
        assert lookup_scale("0.05") == 0.05

    def test_unknown(self):
        """Scales outside the table are rejected."""
        with pytest.raises(UnrecognizedScaleError, match="0.025"):
            lookup_scale(0.025)

    def test_custom_table(self):
        """The table comes from the settings."""
        settings = OffsetSettings(scale_table={0.025: 0.0251})

        assert lookup_scale(0.025, settings) == 0.0251
        with pytest.raises(UnrecognizedScaleError):
            lookup_scale(0.020, settings)


class TestResolveScale:
    """Tests for resolve_scale."""

    def test_cube_consistent(self, header_factory):
        """Two 0.020 cubes resolve to 0.0203."""
        headers = header_factory.create_batch(2, SSCALE=0.020)

        assert resolve_scale(headers, Format.CUBE) == 0.0203

    def test_cube_inconsistent(self, header_factory):
        """Cubes at 0.020 and 0.035 cannot be mosaiced together."""
        headers = [header_factory.create(SSCALE=0.020), header_factory.create(SSCALE=0.035)]

        with pytest.raises(InconsistentHeadersError):
            resolve_scale(headers, Format.CUBE)

    def test_cube_unrecognized(self, header_factory):
        """A shared but unknown scale is rejected."""
        headers = header_factory.create_batch(3, SSCALE=0.025)

        with pytest.raises(UnrecognizedScaleError):
            resolve_scale(headers, Format.CUBE)

    def test_cube_missing_keyword(self, header_factory):
        """Cubes must carry SSCALE."""
        headers = header_factory.create_batch(2)
        del headers[0]["SSCALE"]

        with pytest.raises(MissingKeywordError):
            resolve_scale(headers, Format.CUBE)

    def test_image_uses_fixed_scale(self, header_factory):
        """Images ignore SSCALE entirely."""
        headers = [header_factory.create(SSCALE=0.020), header_factory.create(SSCALE=0.100)]

        assert resolve_scale(headers, Format.IMAGE) == 0.0203

    def test_image_without_scale_keyword(self, header_factory):
        """Images do not need SSCALE at all."""
        headers = header_factory.create_batch(2)
        for header in headers:
            del header["SSCALE"]

        assert resolve_scale(headers, Format.IMAGE) == 0.0203

    def test_custom_keyword(self, header_factory):
        """The scale keyword name comes from the settings."""
        headers = [{"SPAXSCL": 0.1}, {"SPAXSCL": 0.1}]
        settings = OffsetSettings(keywords=KeywordSettings(scale="SPAXSCL"))

        assert resolve_scale(headers, Format.CUBE, settings) == 0.1009
