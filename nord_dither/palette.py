"""The fixed Nord palette and nearest-colour matching."""

from __future__ import annotations

import math

import numpy as np

# name -> RGB, grouped as in the Nord theme
NORD_COLORS: tuple[tuple[str, tuple[int, int, int]], ...] = (
    # Polar Night
    ("nord0", (46, 52, 64)),
    ("nord1", (59, 66, 82)),
    ("nord2", (67, 76, 94)),
    ("nord3", (76, 86, 106)),
    # Snow Storm
    ("nord4", (216, 222, 233)),
    ("nord5", (229, 233, 240)),
    ("nord6", (236, 239, 244)),
    # Frost
    ("nord7", (143, 188, 187)),
    ("nord8", (136, 192, 208)),
    ("nord9", (129, 161, 193)),
    ("nord10", (94, 129, 172)),
    # Aurora
    ("nord11", (191, 97, 106)),
    ("nord12", (208, 135, 112)),
    ("nord13", (235, 203, 139)),
    ("nord14", (163, 190, 140)),
    ("nord15", (180, 142, 173)),
)

PALETTE_GROUPS: dict[str, tuple[str, ...]] = {
    "Polar Night": ("nord0", "nord1", "nord2", "nord3"),
    "Snow Storm": ("nord4", "nord5", "nord6"),
    "Frost": ("nord7", "nord8", "nord9", "nord10"),
    "Aurora": ("nord11", "nord12", "nord13", "nord14", "nord15"),
}

NORD_PALETTE = np.array([rgb for _, rgb in NORD_COLORS], dtype=np.uint8)
NORD_PALETTE.setflags(write=False)

_PALETTE_TUPLES = tuple(rgb for _, rgb in NORD_COLORS)


def closest_index(r: float, g: float, b: float) -> int:
    """Index of the palette entry nearest to ``(r, g, b)`` in RGB space.

    Inputs may be fractional or out of range.  On equal distances the
    earliest entry wins.
    """
    best, best_dist = 0, math.inf
    for i, (pr, pg, pb) in enumerate(_PALETTE_TUPLES):
        dr, dg, db = pr - r, pg - g, pb - b
        dist = math.sqrt(dr * dr + dg * dg + db * db)
        if dist < best_dist:
            best, best_dist = i, dist
    return best


def closest_color(r: float, g: float, b: float) -> tuple[int, int, int]:
    """Nearest Nord colour to ``(r, g, b)`` by Euclidean RGB distance."""
    return _PALETTE_TUPLES[closest_index(r, g, b)]
