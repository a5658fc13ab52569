"""
Command-line interface for the OSIRIS mosaic pipeline.

Commands:
- offsets: Determine mosaic offsets from exposure headers
- quality: Recode a pixel quality extension

Example:
    $ osiris-mosaic --help
    $ osiris-mosaic offsets --format cube s240101_a003*.fits
    $ osiris-mosaic offsets --format image --skip-pa --write *.fits
    $ osiris-mosaic quality s240101_a003001.fits --ext 2 --reverse
"""

from __future__ import annotations

from pathlib import Path

import click
import numpy as np
from astropy.io import fits
from rich.console import Console
from rich.table import Table

from osiris_mosaic import __version__
from osiris_mosaic.config import get_settings, load_settings
from osiris_mosaic.errors import OffsetError
from osiris_mosaic.headers import read_headers, write_offsets
from osiris_mosaic.offsets import determine_offsets
from osiris_mosaic.quality import compress_quality, expand_quality
from osiris_mosaic.utils.logging import configure_from_settings, get_logger

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="osiris-mosaic")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Configuration file path",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.pass_context
def main(ctx: click.Context, config: Path | None, verbose: bool) -> None:
    """OSIRIS mosaic CLI.

    Compute pixel offsets that register a set of exposures taken at
    different pointings, and recode pixel quality flags.
    """
    ctx.ensure_object(dict)

    if config:
        settings = load_settings(config)
    else:
        settings = get_settings()

    ctx.obj["settings"] = settings
    ctx.obj["verbose"] = verbose

    configure_from_settings(settings.logging, level="DEBUG" if verbose else None)


@main.command("offsets")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["image", "cube"], case_sensitive=False),
    default="cube",
    help="Data product format",
)
@click.option(
    "--mode",
    type=click.Choice(["telescope", "ao"], case_sensitive=False),
    default="telescope",
    help="Coordinate mode",
)
@click.option(
    "--skip-pa",
    is_flag=True,
    help="Do not rotate by the position angle (PA = 0)",
)
@click.option(
    "--ext",
    type=int,
    help="HDU index of the exposure header (overrides config)",
)
@click.option(
    "--write",
    is_flag=True,
    help="Store the offsets in each file's header",
)
@click.pass_context
def offsets(
    ctx: click.Context,
    files: tuple[Path, ...],
    fmt: str,
    mode: str,
    skip_pa: bool,
    ext: int | None,
    write: bool,
) -> None:
    """Determine mosaic offsets for FILES.

    The first file is the reference exposure and always gets (0, 0).
    """
    settings = ctx.obj["settings"]
    logger = get_logger(__name__)

    hdu = settings.header_extension if ext is None else ext
    try:
        headers = read_headers(list(files), ext=hdu)
    except (IndexError, OSError) as e:
        logger.error("headers_unreadable", ext=hdu, error=str(e))
        console.print(f"[red]Error:[/red] Cannot read HDU {hdu} headers: {e}")
        ctx.exit(1)

    try:
        result = determine_offsets(
            headers,
            fmt,
            mode,
            skip_position_angle=skip_pa,
            settings=settings.offsets,
        )
    except OffsetError as e:
        logger.error("offsets_failed", code=e.code, error=str(e))
        console.print(f"[red]Error ({e.code}):[/red] {e}")
        ctx.exit(1)

    table = Table(title="Mosaic Offsets")
    table.add_column("File", style="cyan")
    table.add_column("X (pix)", justify="right")
    table.add_column("Y (pix)", justify="right")

    for path, (dx, dy) in zip(files, result.pairs()):
        table.add_row(path.name, f"{dx:.3f}", f"{dy:.3f}")

    console.print(table)
    console.print(
        f"Scale: [cyan]{result.scale:.4f}[/cyan] arcsec/pix   "
        f"PA: [cyan]{np.degrees(result.position_angle):.3f}[/cyan] deg"
    )

    if write:
        write_offsets(list(files), result, ext=hdu, keywords=settings.offsets.keywords)
        console.print(f"[green]✓[/green] Offsets written to {len(files)} headers")


@main.command("quality")
@click.argument(
    "file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--ext",
    type=int,
    default=2,
    show_default=True,
    help="HDU index of the quality extension",
)
@click.option(
    "--reverse",
    is_flag=True,
    help="Expand two-bit flags back to three bits",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write to this file instead of updating in place",
)
@click.pass_context
def quality(
    ctx: click.Context,
    file: Path,
    ext: int,
    reverse: bool,
    output: Path | None,
) -> None:
    """Recode the quality flags stored in FILE."""
    logger = get_logger(__name__)
    recode = expand_quality if reverse else compress_quality

    # copy into memory so the source file can be overwritten
    with fits.open(file, memmap=False) as opened:
        hdul = fits.HDUList([hdu.copy() for hdu in opened])

    data = hdul[ext].data
    if data is None:
        console.print(f"[red]Error:[/red] HDU {ext} has no data ({file.name})")
        ctx.exit(1)

    try:
        hdul[ext].data = recode(data)
    except OffsetError as e:
        console.print(f"[red]Error ({e.code}):[/red] {e}")
        ctx.exit(1)

    target = output or file
    hdul.writeto(target, overwrite=True)

    logger.info(
        "quality_recoded",
        path=str(target),
        ext=ext,
        direction="expand" if reverse else "compress",
    )
    console.print(f"[green]✓[/green] Quality flags recoded: [cyan]{target}[/cyan]")
