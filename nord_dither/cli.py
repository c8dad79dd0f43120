"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import numpy as np
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from nord_dither.buffer import ImageBuffer
from nord_dither.color_utils import mean_rgb_error
from nord_dither.config import DitherConfig
from nord_dither.dithering import ACCUMULATOR_MODES, dither
from nord_dither.image_io import (
    load_rgba,
    make_comparison_grid,
    save_palette_swatch,
    save_rgba,
)
from nord_dither.palette import NORD_COLORS, PALETTE_GROUPS

app = typer.Typer(
    name="nord-dither",
    help="Dither images onto the 16-colour Nord palette.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
    )


def _collect_images(folder: Path, extensions: frozenset[str]) -> list[Path]:
    if not folder.exists():
        return []
    return sorted(
        f for f in folder.iterdir()
        if f.is_file() and f.suffix.lower() in extensions
    )


def _check_accumulator(value: str) -> str:
    if value not in ACCUMULATOR_MODES:
        msg = f"must be one of: {', '.join(ACCUMULATOR_MODES)}"
        raise typer.BadParameter(msg)
    return value


def _process(
    img_path: Path,
    out_path: Path,
    cfg: DitherConfig,
    rng: np.random.Generator,
    comparison_path: Path | None,
) -> tuple[ImageBuffer, float, float]:
    t0 = time.perf_counter()
    source = load_rgba(img_path)
    result = dither(
        source, cfg.noise_amount, rng=rng, accumulator=cfg.accumulator,
    )
    save_rgba(result, out_path, cfg.pixel_upscale)
    if comparison_path is not None:
        make_comparison_grid(source, result, comparison_path, cfg.pixel_upscale)
    err = mean_rgb_error(source.to_array(), result.to_array())
    return result, err, time.perf_counter() - t0


# Defaults come from DitherConfig - single source of truth
_DEFAULTS = DitherConfig()


# -- batch command -----------------------------------------------------

@app.command()
def batch(
    input_dir: Path = typer.Option(
        _DEFAULTS.input_dir, "--input", "-i", help="Folder with source images",
    ),
    output_dir: Path = typer.Option(
        _DEFAULTS.output_dir, "--output", "-o", help="Results folder",
    ),
    noise: float = typer.Option(
        _DEFAULTS.noise_amount, "--noise", "-n",
        help="Noise as a fraction of full channel range (0 = none)",
    ),
    seed: int | None = typer.Option(
        _DEFAULTS.seed, "--seed", "-s", help="Noise seed (None = random)",
    ),
    accumulator: str = typer.Option(
        _DEFAULTS.accumulator, "--accumulator", callback=_check_accumulator,
        help="'float' or 'uint8' (canvas-style clamped writes)",
    ),
    upscale: int = typer.Option(
        _DEFAULTS.pixel_upscale, "--upscale", "-u", help="Pixel upscale factor",
    ),
    comparison: bool = typer.Option(
        _DEFAULTS.save_comparison, "--comparison/--no-comparison",
        help="Save a side-by-side comparison image",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Dither all images in INPUT_DIR and write results to OUTPUT_DIR."""
    _setup_logging(verbose)
    logger = logging.getLogger("nord_dither")

    cfg = DitherConfig(
        noise_amount=noise,
        seed=seed,
        accumulator=accumulator,
        pixel_upscale=upscale,
        save_comparison=comparison,
        input_dir=input_dir,
        output_dir=output_dir,
    )

    input_dir.mkdir(exist_ok=True)
    output_dir.mkdir(exist_ok=True)

    images = _collect_images(input_dir, cfg.SUPPORTED_EXTENSIONS)
    if not images:
        console.print(f"\n[yellow]No images found in {input_dir}/[/yellow]")
        console.print("Place .jpg / .png / ... files there and re-run.\n")
        raise typer.Exit(0)

    console.print(Panel.fit(
        f"[bold]NORD DITHER[/bold]\n"
        f"Noise: {cfg.noise_amount}  |  Seed: {cfg.seed}\n"
        f"Accumulator: {cfg.accumulator}  |  Images: {len(images)}",
        border_style="cyan",
    ))

    # One stream for the whole batch so a seed reproduces the full run
    rng = np.random.default_rng(cfg.seed)

    for idx, img_path in enumerate(images, 1):
        stem = img_path.stem
        console.rule(f"[bold cyan][{idx}/{len(images)}] {img_path.name}[/bold cyan]")

        out_path = output_dir / f"{stem}_nord.{cfg.output_format}"
        comp_path = (
            output_dir / f"{stem}_comparison.{cfg.output_format}"
            if cfg.save_comparison else None
        )
        result, err, elapsed = _process(img_path, out_path, cfg, rng, comp_path)
        logger.debug("Saved %s", out_path)

        console.print(
            f"  [green]✓[/green] {out_path.name}  "
            f"[dim]{result.width}x{result.height} = {result.num_pixels} px  "
            f"error={err:.1f}  time={elapsed:.1f}s[/dim]"
        )

    console.print(Panel.fit(
        f"[bold green]ALL DONE[/bold green] - results in [bold]{output_dir}/[/bold]",
        border_style="green",
    ))


# -- single-image command ----------------------------------------------

@app.command()
def single(
    image: Path = typer.Argument(..., help="Path to the source image"),
    output: Path = typer.Option(Path("output/nord.png"), "--output", "-o"),
    noise: float = typer.Option(_DEFAULTS.noise_amount, "--noise", "-n"),
    seed: int | None = typer.Option(_DEFAULTS.seed, "--seed", "-s"),
    accumulator: str = typer.Option(
        _DEFAULTS.accumulator, "--accumulator", callback=_check_accumulator,
    ),
    upscale: int = typer.Option(_DEFAULTS.pixel_upscale, "--upscale", "-u"),
    comparison: bool = typer.Option(
        _DEFAULTS.save_comparison, "--comparison/--no-comparison",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Dither a single image."""
    _setup_logging(verbose)

    cfg = DitherConfig(
        noise_amount=noise,
        seed=seed,
        accumulator=accumulator,
        pixel_upscale=upscale,
        save_comparison=comparison,
    )
    output.parent.mkdir(parents=True, exist_ok=True)

    comp_path = (
        output.with_name(f"{output.stem}_comparison{output.suffix}")
        if cfg.save_comparison else None
    )
    result, err, elapsed = _process(
        image, output, cfg, np.random.default_rng(cfg.seed), comp_path,
    )

    console.print(
        f"[green]✓[/green] Saved to {output}  "
        f"[dim]{result.width}x{result.height} = {result.num_pixels} px  "
        f"error={err:.1f}  time={elapsed:.1f}s[/dim]"
    )


# -- palette command ---------------------------------------------------

@app.command()
def palette(
    swatch: Path | None = typer.Option(
        None, "--swatch", help="Also save the palette as an image",
    ),
) -> None:
    """Show the 16 Nord colours used for matching."""
    group_of = {
        name: group for group, names in PALETTE_GROUPS.items() for name in names
    }
    table = Table(title="Nord palette")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Group")
    table.add_column("RGB")
    table.add_column("")

    for i, (name, (r, g, b)) in enumerate(NORD_COLORS):
        table.add_row(
            str(i), name, group_of[name], f"{r}, {g}, {b}",
            f"[on rgb({r},{g},{b})]      [/]",
        )
    console.print(table)

    if swatch is not None:
        swatch.parent.mkdir(parents=True, exist_ok=True)
        save_palette_swatch(swatch)
        console.print(f"[green]✓[/green] Swatch saved to {swatch}")


if __name__ == "__main__":
    app()
