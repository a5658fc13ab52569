"""Test fixtures for the OSIRIS mosaic pipeline."""

from tests.fixtures.factories import HeaderFactory, write_fits

__all__ = [
    "HeaderFactory",
    "write_fits",
]
