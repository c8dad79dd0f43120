"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class DitherConfig:
    """All tuneable parameters for a dithering run.

    Attributes:
        noise_amount:    Pre-quantisation noise as a fraction of 255.
        seed:            Noise seed (None = non-deterministic).
        accumulator:     "float" (real-valued error) or "uint8" (canvas-style
                         rounding and clamping on every diffusion write).
        pixel_upscale:   Each pixel becomes n x n in saved images.
        output_format:   Image format for saved files.
        save_comparison: Generate a side-by-side comparison image.
        input_dir:       Folder to scan for source images.
        output_dir:      Folder for results.
    """

    # Dithering
    noise_amount: float = 0.1
    seed: int | None = None
    accumulator: str = "float"  # "float" | "uint8"

    # Output
    pixel_upscale: int = 1
    output_format: str = "png"
    save_comparison: bool = True

    # Paths
    input_dir: Path = field(default_factory=lambda: Path("images"))
    output_dir: Path = field(default_factory=lambda: Path("output"))

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
        {".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".tif", ".webp", ".gif"}
    )
