"""
Nord Dither
===========

Reduce any RGBA image to the 16 colours of the Nord palette using
Floyd-Steinberg error diffusion, with optional noise injected before
quantisation to break up banding and regular patterns.

Alpha is passed through untouched.
"""

__version__ = "1.0.0"

from nord_dither.buffer import ImageBuffer, InvalidInputError
from nord_dither.config import DitherConfig
from nord_dither.dithering import FLOYD_STEINBERG_WEIGHTS, dither, dither_array
from nord_dither.image_io import (
    load_rgba,
    make_comparison_grid,
    save_palette_swatch,
    save_rgba,
)
from nord_dither.palette import NORD_COLORS, NORD_PALETTE, closest_color, closest_index

__all__ = [
    "FLOYD_STEINBERG_WEIGHTS",
    "NORD_COLORS",
    "NORD_PALETTE",
    "DitherConfig",
    "ImageBuffer",
    "InvalidInputError",
    "closest_color",
    "closest_index",
    "dither",
    "dither_array",
    "load_rgba",
    "make_comparison_grid",
    "save_palette_swatch",
    "save_rgba",
]
