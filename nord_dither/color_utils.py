"""RGB distance helpers."""

from __future__ import annotations

import numpy as np


def color_distance(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Euclidean RGB distance along the last axis."""
    diff = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return np.sqrt(np.sum(diff ** 2, axis=-1))


def mean_rgb_error(source: np.ndarray, result: np.ndarray) -> float:
    """Mean per-pixel RGB distance between two ``(..., 4)`` or ``(..., 3)`` images.

    Alpha is ignored.  Returns 0.0 for empty images.
    """
    s = np.asarray(source)[..., :3].reshape(-1, 3)
    r = np.asarray(result)[..., :3].reshape(-1, 3)
    if len(s) == 0:
        return 0.0
    return float(np.mean(color_distance(s, r)))
