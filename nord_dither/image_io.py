"""Image loading, saving, and comparison-grid generation."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from nord_dither.buffer import ImageBuffer
from nord_dither.palette import NORD_COLORS


def load_rgba(path: str | Path) -> ImageBuffer:
    """Load any Pillow-readable image as an 8-bit RGBA buffer."""
    with Image.open(path) as img:
        arr = np.array(img.convert("RGBA"), dtype=np.uint8)
    return ImageBuffer.from_array(arr)


def save_rgba(
    image: ImageBuffer,
    path: str | Path,
    pixel_upscale: int = 1,
) -> None:
    """Save a buffer, nearest-neighbour upscaled by *pixel_upscale*."""
    arr = np.clip(np.rint(image.to_array()), 0, 255).astype(np.uint8)
    img = Image.fromarray(arr)
    if pixel_upscale > 1:
        img = img.resize(
            (image.width * pixel_upscale, image.height * pixel_upscale),
            Image.NEAREST,
        )
    img.save(path)


def save_palette_swatch(
    path: str | Path,
    cell: int = 48,
) -> None:
    """Render the Nord palette as a labelled row of squares."""
    label_height = 20
    n = len(NORD_COLORS)
    canvas = Image.new("RGB", (n * cell, cell + label_height), (30, 30, 30))
    draw = ImageDraw.Draw(canvas)
    font = ImageFont.load_default()

    for i, (name, rgb) in enumerate(NORD_COLORS):
        x = i * cell
        draw.rectangle([x, label_height, x + cell - 1, label_height + cell - 1], fill=rgb)
        bbox = draw.textbbox((0, 0), name, font=font)
        tx = x + (cell - (bbox[2] - bbox[0])) // 2
        draw.text((tx, 4), name, fill=(220, 220, 220), font=font)

    canvas.save(path)


def make_comparison_grid(
    source: ImageBuffer,
    dithered: ImageBuffer,
    output_path: str | Path,
    pixel_upscale: int = 1,
) -> None:
    """Create a 2-panel comparison: Original | Dithered."""
    panel_w = source.width * pixel_upscale
    panel_h = source.height * pixel_upscale
    label_height = 36

    panels = [
        Image.fromarray(
            np.clip(np.rint(buf.to_array()), 0, 255).astype(np.uint8),
        ).resize((panel_w, panel_h), Image.NEAREST)
        for buf in (source, dithered)
    ]
    labels = [f"Original {source.width}x{source.height}", "Nord dithered"]

    gap = 8
    total_w = len(panels) * panel_w + (len(panels) - 1) * gap
    total_h = panel_h + label_height

    canvas = Image.new("RGB", (total_w, total_h), (46, 52, 64))
    draw = ImageDraw.Draw(canvas)

    try:
        font = ImageFont.truetype(
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", 18,
        )
    except OSError:
        font = ImageFont.load_default()

    for i, (panel, label) in enumerate(zip(panels, labels, strict=False)):
        x = i * (panel_w + gap)
        canvas.paste(panel, (x, label_height), panel)

        bbox = draw.textbbox((0, 0), label, font=font)
        text_w = bbox[2] - bbox[0]
        tx = x + (panel_w - text_w) // 2
        draw.text((tx, 6), label, fill=(236, 239, 244), font=font)

    canvas.save(output_path)
