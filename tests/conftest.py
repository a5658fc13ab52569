"""
Pytest configuration and shared fixtures for the OSIRIS mosaic pipeline.

This module provides:
- Header factories for generating exposure batches
- FITS files on disk for header I/O and CLI tests
- Logging and settings cache cleanup between tests
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from osiris_mosaic.config import OffsetSettings
from osiris_mosaic.config.settings import get_settings
from tests.fixtures.factories import HeaderFactory, write_fits


# ============================================================================
# FACTORY FIXTURES
# ============================================================================


@pytest.fixture
def header_factory() -> type[HeaderFactory]:
    """Provide HeaderFactory with its counter reset."""
    HeaderFactory.reset()
    return HeaderFactory


@pytest.fixture
def offset_settings() -> OffsetSettings:
    """Default offset settings."""
    return OffsetSettings()


@pytest.fixture
def scenario_headers(header_factory: type[HeaderFactory]) -> list[dict]:
    """Two cube exposures 0.001 deg apart in RA at Dec 20."""
    return [
        header_factory.create(RA=10.0, DEC=20.0),
        header_factory.create(RA=10.001, DEC=20.0),
    ]


# ============================================================================
# FITS FIXTURES
# ============================================================================


@pytest.fixture
def fits_batch(tmp_path: Path, header_factory: type[HeaderFactory]) -> list[Path]:
    """Three exposure files dithered 1 arcsec in Dec."""
    headers = header_factory.create_dither(3, dec_step=1 / 3600)
    return [
        write_fits(tmp_path / f"s240101_a003{i + 1:03d}.fits", header)
        for i, header in enumerate(headers)
    ]


# ============================================================================
# CLEANUP
# ============================================================================


@pytest.fixture(autouse=True)
def reset_logging_and_settings() -> Iterator[None]:
    """Undo logging configuration and cached settings after each test."""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
    get_settings.cache_clear()
