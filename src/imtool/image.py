"""In-memory raster image."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as onp

from .color import MAX_INTENSITY, NUM_CHANNELS, channel_bits, channel_dtype
from .errors import InvalidArgument
from .storage import PixelStore, make_pixels


@dataclass
class Image:
    """A width x height grid of colors stored row-major.

    Every channel value is bounded by ``max_intensity``; the channel width
    (8 or 16 bit) follows from it.
    """
    width: int
    height: int
    max_intensity: int
    pixels: PixelStore

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise InvalidArgument("image size", f"{self.width}x{self.height}")
        if not (1 <= self.max_intensity <= MAX_INTENSITY):
            raise InvalidArgument("max intensity", self.max_intensity)
        if len(self.pixels) != self.width * self.height:
            raise InvalidArgument(
                "pixel count", len(self.pixels),
                f"expected {self.width * self.height} for {self.width}x{self.height}",
            )
        expected = channel_dtype(self.max_intensity)
        if self.pixels.dtype != expected:
            raise InvalidArgument("pixel dtype", self.pixels.dtype, f"expected {expected} for max {self.max_intensity}")
        peak = int(self.pixels.as_array().max())
        if peak > self.max_intensity:
            raise InvalidArgument("pixel value", peak, f"above max intensity {self.max_intensity}")

    @classmethod
    def from_array(cls, array: onp.ndarray, max_intensity: int, layout: str = "aos") -> "Image":
        """Build an image from a ``(height, width, 3)`` array."""
        array = onp.asarray(array)
        if array.ndim != 3 or array.shape[2] != NUM_CHANNELS:
            raise InvalidArgument("image array shape", array.shape)
        height, width = array.shape[:2]
        if array.size and (array.min() < 0 or array.max() > max_intensity):
            bad = int(array.min()) if array.min() < 0 else int(array.max())
            raise InvalidArgument("pixel value", bad, f"outside 0..{max_intensity}")
        flat = array.reshape(-1, NUM_CHANNELS).astype(channel_dtype(max_intensity))
        return cls(width, height, max_intensity, make_pixels(flat, layout))

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def bit_depth(self) -> int:
        return channel_bits(self.max_intensity)

    @property
    def layout(self) -> str:
        return self.pixels.layout

    def to_array(self) -> onp.ndarray:
        """Pixels as a ``(height, width, 3)`` array copy."""
        return self.pixels.as_array().reshape(self.height, self.width, NUM_CHANNELS)

    def copy(self) -> "Image":
        return Image(self.width, self.height, self.max_intensity, self.pixels.copy())
