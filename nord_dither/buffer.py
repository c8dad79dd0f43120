"""Flat row-major RGBA pixel buffer."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

CHANNELS = 4


class InvalidInputError(ValueError):
    """Raised when a buffer's dimensions and data do not agree."""


@dataclass(frozen=True, eq=False)
class ImageBuffer:
    """A width x height RGBA image stored as one flat channel sequence.

    Attributes:
        width:  Pixels per row (may be 0).
        height: Number of rows (may be 0).
        data:   1-D array of ``width * height * 4`` channel values in
                row-major order (R, G, B, A per pixel).  Values outside
                [0, 255] and fractional values are accepted.
    """

    width: int
    height: int
    data: np.ndarray

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            msg = f"Image dimensions must be non-negative, got {self.width}x{self.height}"
            raise InvalidInputError(msg)
        data = np.asarray(self.data)
        if data.ndim != 1:
            msg = (
                f"Buffer data must be 1-D, got shape {data.shape}; "
                "use ImageBuffer.from_array for (H, W, 4) arrays"
            )
            raise InvalidInputError(msg)
        expected = self.width * self.height * CHANNELS
        if data.size != expected:
            msg = (
                f"Buffer holds {data.size} values, expected {expected} "
                f"for {self.width}x{self.height} RGBA"
            )
            raise InvalidInputError(msg)
        object.__setattr__(self, "data", data)

    @classmethod
    def from_array(cls, rgba: np.ndarray) -> ImageBuffer:
        """Build a buffer from an ``(H, W, 4)`` array."""
        arr = np.asarray(rgba)
        if arr.ndim != 3 or arr.shape[2] != CHANNELS:
            msg = f"Expected an (H, W, 4) array, got shape {arr.shape}"
            raise InvalidInputError(msg)
        h, w = arr.shape[:2]
        return cls(w, h, arr.reshape(-1).copy())

    def to_array(self) -> np.ndarray:
        """View the data as an ``(H, W, 4)`` array."""
        return self.data.reshape(self.height, self.width, CHANNELS)

    @property
    def num_pixels(self) -> int:
        return self.width * self.height
