"""Floyd-Steinberg error-diffusion dithering onto the Nord palette.

Each pixel is perturbed with uniform noise, matched to the nearest Nord
colour, and the residual is pushed onto the four Floyd-Steinberg
neighbours that the row-major scan has not reached yet:

            [*]  7
         3   5   1        (all /16)

Error is accumulated in place in the working buffer, so a pixel's "old"
value already carries whatever its earlier neighbours handed it.  The old
value is clamped to [0, 255] *before* the residual is computed; error that
would push a channel out of range is truncated, not carried further.
Shares aimed outside the image are dropped.
"""

from __future__ import annotations

import logging
import time
from typing import Protocol

import numpy as np

from nord_dither.buffer import ImageBuffer
from nord_dither.palette import closest_color

logger = logging.getLogger(__name__)

# ((dx, dy), weight in sixteenths) in the order the shares are applied
FLOYD_STEINBERG_WEIGHTS: tuple[tuple[tuple[int, int], int], ...] = (
    ((1, 0), 7),
    ((-1, 1), 3),
    ((0, 1), 5),
    ((1, 1), 1),
)
WEIGHT_DENOMINATOR = 16

ACCUMULATOR_MODES = ("float", "uint8")


class NoiseStream(Protocol):
    """Anything with a ``numpy.random.Generator``-style ``random``."""

    def random(self, size: tuple[int, ...]) -> np.ndarray: ...


def _draw_noise(
    rng: NoiseStream, h: int, w: int, noise_amount: float,
) -> np.ndarray:
    # Drawn in one block: same consumption order as three draws per pixel
    samples = np.asarray(rng.random((h, w, 3)), dtype=np.float64)
    return (samples - 0.5) * 255 * noise_amount


def dither(
    image: ImageBuffer,
    noise_amount: float = 0.1,
    rng: NoiseStream | None = None,
    accumulator: str = "float",
) -> ImageBuffer:
    """Dither *image* onto the Nord palette.

    Args:
        image:        Source RGBA buffer (left untouched).
        noise_amount: Noise scale as a fraction of the full channel range;
            each channel gets ``U[-0.5, 0.5) * 255 * noise_amount``.
        rng:          Noise source.  ``None`` builds a fresh
            ``np.random.default_rng()``.
        accumulator:  ``"float"`` keeps diffused error as real values;
            ``"uint8"`` rounds (half to even) and clamps the source R/G/B
            and each diffusion write to [0, 255] like a canvas
            ``Uint8ClampedArray``.

    Returns:
        A new buffer of the same size.  R/G/B are Nord colours, alpha is
        copied from the source.  uint8 when the source is uint8, float64
        otherwise.
    """
    if accumulator not in ACCUMULATOR_MODES:
        msg = f"Unknown accumulator '{accumulator}'. Available: {', '.join(ACCUMULATOR_MODES)}"
        raise ValueError(msg)

    w, h = image.width, image.height
    out_dtype = np.uint8 if image.data.dtype == np.uint8 else np.float64

    src = image.to_array()
    work = src.astype(np.float64)  # copy; source stays pristine
    if h == 0 or w == 0:
        return ImageBuffer(w, h, work.reshape(-1).astype(out_dtype))

    clamp_writes = accumulator == "uint8"
    if clamp_writes:
        # a canvas stores the source itself rounded and clamped
        work[..., :3] = np.clip(np.rint(work[..., :3]), 0, 255)

    if rng is None:
        rng = np.random.default_rng()
    noise = _draw_noise(rng, h, w, noise_amount).tolist()

    logger.info(
        "Dithering %dx%d (noise=%.3f, accumulator=%s)", w, h, noise_amount, accumulator,
    )
    t0 = time.perf_counter()

    # scalar scan over nested lists
    rows = work.tolist()
    alpha = src[..., 3].tolist()

    for y in range(h):
        for x in range(w):
            px = rows[y][x]
            nr, ng, nb = noise[y][x]
            old_r = min(255.0, max(0.0, px[0] + nr))
            old_g = min(255.0, max(0.0, px[1] + ng))
            old_b = min(255.0, max(0.0, px[2] + nb))
            new_r, new_g, new_b = closest_color(old_r, old_g, old_b)

            px[0], px[1], px[2] = new_r, new_g, new_b
            px[3] = alpha[y][x]

            err = (old_r - new_r, old_g - new_g, old_b - new_b)

            for (dx, dy), weight in FLOYD_STEINBERG_WEIGHTS:
                nx, ny = x + dx, y + dy
                if nx < 0 or nx >= w or ny >= h:
                    continue
                target = rows[ny][nx]
                for c in range(3):
                    value = target[c] + err[c] * weight / WEIGHT_DENOMINATOR
                    if clamp_writes:
                        value = min(255, max(0, round(value)))
                    target[c] = value

    logger.info("Dithering done  (%.2f s)", time.perf_counter() - t0)
    result = np.array(rows, dtype=np.float64)
    return ImageBuffer(w, h, result.reshape(-1).astype(out_dtype))


def dither_array(
    rgba: np.ndarray,
    noise_amount: float = 0.1,
    rng: NoiseStream | None = None,
    accumulator: str = "float",
) -> np.ndarray:
    """:func:`dither` for ``(H, W, 4)`` arrays."""
    result = dither(
        ImageBuffer.from_array(rgba), noise_amount, rng=rng, accumulator=accumulator,
    )
    return result.to_array()
