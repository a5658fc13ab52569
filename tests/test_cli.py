"""
Tests for the command-line interface.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pytest
from astropy.io import fits
from click.testing import CliRunner

from osiris_mosaic import __version__
from osiris_mosaic.cli import main
from tests.fixtures.factories import write_fits


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestMain:
    """Tests for the command group."""

    def test_help(self, runner):
        """Help lists the commands."""
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "offsets" in result.output
        assert "quality" in result.output

    def test_version(self, runner):
        """--version prints the package version."""
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_config_file(self, runner, tmp_path, fits_batch):
        """An explicit config file is used for the run."""
        config = tmp_path / "local.toml"
        config.write_text("[offsets.keywords]\nra = \"OBJRA\"\n")

        result = runner.invoke(
            main, ["--config", str(config), "offsets", *map(str, fits_batch)]
        )

        assert result.exit_code == 1
        assert "OBJRA" in result.output

    def test_verbose_sets_debug_level(self, runner, fits_batch):
        """--verbose overrides the configured log level."""
        result = runner.invoke(main, ["--verbose", "offsets", *map(str, fits_batch)])

        assert result.exit_code == 0, result.output
        assert logging.getLogger().level == logging.DEBUG

    def test_log_level_from_config(self, runner, tmp_path, fits_batch):
        """Without --verbose the config file's level is used."""
        config = tmp_path / "quiet.toml"
        config.write_text("[logging]\nlevel = \"ERROR\"\n")

        result = runner.invoke(
            main, ["--config", str(config), "offsets", *map(str, fits_batch)]
        )

        assert result.exit_code == 0, result.output
        assert logging.getLogger().level == logging.ERROR


class TestOffsetsCommand:
    """Tests for the offsets command."""

    def test_prints_table(self, runner, fits_batch: list[Path]):
        """Offsets are listed per file."""
        result = runner.invoke(main, ["offsets", *map(str, fits_batch)])

        assert result.exit_code == 0, result.output
        assert "Mosaic Offsets" in result.output
        for path in fits_batch:
            assert path.name in result.output
        assert "0.0203" in result.output

    def test_dec_dither_values(self, runner, fits_batch: list[Path]):
        """One arcsec Dec steps give about 49.26 pixel x offsets."""
        result = runner.invoke(main, ["offsets", "--format", "cube", *map(str, fits_batch)])

        assert result.exit_code == 0, result.output
        assert "49.261" in result.output
        assert "98.522" in result.output

    def test_write(self, runner, fits_batch: list[Path]):
        """--write stores X_OFF / Y_OFF in each file."""
        result = runner.invoke(main, ["offsets", "--write", *map(str, fits_batch)])

        assert result.exit_code == 0, result.output
        headers = [fits.getheader(p, 0) for p in fits_batch]
        assert (headers[0]["X_OFF"], headers[0]["Y_OFF"]) == (0.0, 0.0)
        assert headers[1]["X_OFF"] == pytest.approx(1.0 / 0.0203, rel=1e-6)

    def test_without_write_headers_untouched(self, runner, fits_batch: list[Path]):
        """Nothing is written unless asked."""
        runner.invoke(main, ["offsets", *map(str, fits_batch)])

        assert "X_OFF" not in fits.getheader(fits_batch[1], 0)

    def test_inconsistent_position_angle(self, runner, tmp_path, header_factory):
        """Pipeline failures exit with status 1 and the error code."""
        paths = [
            write_fits(tmp_path / "a.fits", header_factory.create(ROTPOSN=0.0)),
            write_fits(tmp_path / "b.fits", header_factory.create(ROTPOSN=2.0)),
        ]

        result = runner.invoke(main, ["offsets", *map(str, paths)])

        assert result.exit_code == 1
        assert "inconsistent_position_angle" in result.output

    def test_skip_pa(self, runner, tmp_path, header_factory):
        """--skip-pa accepts rotated exposures."""
        paths = [
            write_fits(tmp_path / "a.fits", header_factory.create(ROTPOSN=0.0)),
            write_fits(tmp_path / "b.fits", header_factory.create(ROTPOSN=2.0)),
        ]

        result = runner.invoke(main, ["offsets", "--skip-pa", *map(str, paths)])

        assert result.exit_code == 0, result.output

    def test_single_file(self, runner, fits_batch: list[Path]):
        """One file is not enough."""
        result = runner.invoke(main, ["offsets", str(fits_batch[0])])

        assert result.exit_code == 1
        assert "insufficient_data" in result.output

    def test_ao_mode(self, runner, fits_batch: list[Path]):
        """AO mode is reported as missing keywords here."""
        result = runner.invoke(main, ["offsets", "--mode", "ao", *map(str, fits_batch)])

        assert result.exit_code == 1
        assert "missing_keyword" in result.output

    def test_extension_out_of_range(self, runner, fits_batch: list[Path]):
        """A missing HDU is reported instead of raising."""
        result = runner.invoke(main, ["offsets", "--ext", "7", *map(str, fits_batch)])

        assert result.exit_code == 1
        assert "Cannot read HDU 7" in result.output
        assert not isinstance(result.exception, IndexError)

    def test_not_a_fits_file(self, runner, tmp_path, fits_batch: list[Path]):
        """Unreadable files are reported instead of raising."""
        garbage = tmp_path / "garbage.fits"
        garbage.write_bytes(b"not a fits file " * 400)

        result = runner.invoke(main, ["offsets", str(fits_batch[0]), str(garbage)])

        assert result.exit_code == 1
        assert "Cannot read HDU 0" in result.output
        assert not isinstance(result.exception, OSError)

    def test_invalid_format_choice(self, runner, fits_batch: list[Path]):
        """Click rejects unknown formats."""
        result = runner.invoke(main, ["offsets", "--format", "spectrum", *map(str, fits_batch)])

        assert result.exit_code == 2


class TestQualityCommand:
    """Tests for the quality command."""

    def _file(self, tmp_path: Path, header_factory) -> Path:
        quality = np.array([[0, 1], [3, 7]], dtype=np.uint8)
        return write_fits(tmp_path / "q.fits", header_factory.create(), quality=quality)

    def test_compress_in_place(self, runner, tmp_path, header_factory):
        """The quality extension is recoded in place."""
        path = self._file(tmp_path, header_factory)

        result = runner.invoke(main, ["quality", str(path)])

        assert result.exit_code == 0, result.output
        np.testing.assert_array_equal(fits.getdata(path, 2), [[0, 3], [1, 2]])

    def test_round_trip_via_output(self, runner, tmp_path, header_factory):
        """Compress then --reverse restores the original flags."""
        path = self._file(tmp_path, header_factory)
        compact = tmp_path / "compact.fits"
        restored = tmp_path / "restored.fits"

        first = runner.invoke(main, ["quality", str(path), "-o", str(compact)])
        second = runner.invoke(main, ["quality", str(compact), "--reverse", "-o", str(restored)])

        assert first.exit_code == 0, first.output
        assert second.exit_code == 0, second.output
        np.testing.assert_array_equal(fits.getdata(restored, 2), fits.getdata(path, 2))

    def test_other_extensions_kept(self, runner, tmp_path, header_factory):
        """Header and science data survive the rewrite."""
        path = self._file(tmp_path, header_factory)

        runner.invoke(main, ["quality", str(path)])

        with fits.open(path) as hdul:
            assert len(hdul) == 3
            assert hdul[0].header["SSCALE"] == pytest.approx(0.02)
            assert hdul[1].data.shape == (8, 8)

    def test_float_extension_rejected(self, runner, tmp_path, header_factory):
        """Science data is not a quality mask."""
        path = self._file(tmp_path, header_factory)

        result = runner.invoke(main, ["quality", str(path), "--ext", "1"])

        assert result.exit_code == 1
        assert "malformed_input" in result.output

    def test_empty_extension(self, runner, tmp_path, header_factory):
        """HDUs without data are reported."""
        path = self._file(tmp_path, header_factory)

        result = runner.invoke(main, ["quality", str(path), "--ext", "0"])

        assert result.exit_code == 1
        assert "has no data" in result.output
