"""Pixel stores: the color stream every transformation works against.

Two backends hold the same row-major sequence of colors:

* ``AosPixels`` keeps one ``(N, 3)`` array, one contiguous record per pixel.
* ``SoaPixels`` keeps three ``(N,)`` arrays, one per channel.

Algorithms only use the ``PixelStore`` interface, so both layouts produce
identical results.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator

import numpy as onp

from .color import Color, NUM_CHANNELS

LAYOUTS = ("aos", "soa")


class PixelStore(ABC):
    """Index-based access to a sequence of colors."""

    @abstractmethod
    def __len__(self) -> int:
        ...

    @abstractmethod
    def color_at(self, index: int) -> Color:
        ...

    @abstractmethod
    def set_color_at(self, index: int, color: Color) -> None:
        ...

    @abstractmethod
    def fill(self, color: Color) -> None:
        """Set every pixel to `color`."""

    @abstractmethod
    def as_array(self) -> onp.ndarray:
        """Return an ``(N, 3)`` array copy of the pixels."""

    @property
    @abstractmethod
    def dtype(self) -> onp.dtype:
        ...

    @property
    @abstractmethod
    def layout(self) -> str:
        ...

    def __iter__(self) -> Iterator[Color]:
        for i in range(len(self)):
            yield self.color_at(i)

    def copy(self) -> "PixelStore":
        return make_pixels(self.as_array(), self.layout)


class AosPixels(PixelStore):
    """Array-of-structures store over an ``(N, 3)`` array."""

    def __init__(self, data: onp.ndarray) -> None:
        if data.ndim != 2 or data.shape[1] != NUM_CHANNELS:
            raise ValueError(f"expected an (N, 3) array, got shape {data.shape}")
        self._data = data

    def __len__(self) -> int:
        return self._data.shape[0]

    def color_at(self, index: int) -> Color:
        r, g, b = self._data[index].tolist()
        return Color(r, g, b)

    def set_color_at(self, index: int, color: Color) -> None:
        self._data[index] = color

    def fill(self, color: Color) -> None:
        self._data[:] = color

    def as_array(self) -> onp.ndarray:
        return self._data.copy()

    @property
    def dtype(self) -> onp.dtype:
        return self._data.dtype

    @property
    def layout(self) -> str:
        return "aos"

    def __iter__(self) -> Iterator[Color]:
        for r, g, b in self._data.tolist():
            yield Color(r, g, b)


class SoaPixels(PixelStore):
    """Structure-of-arrays store, one array per channel."""

    def __init__(self, red: onp.ndarray, green: onp.ndarray, blue: onp.ndarray) -> None:
        if not (red.shape == green.shape == blue.shape) or red.ndim != 1:
            raise ValueError("channel arrays must be 1-D and of equal length")
        if not (red.dtype == green.dtype == blue.dtype):
            raise ValueError("channel arrays must share one dtype")
        self._channels = (red, green, blue)

    def __len__(self) -> int:
        return self._channels[0].shape[0]

    def color_at(self, index: int) -> Color:
        red, green, blue = self._channels
        return Color(int(red[index]), int(green[index]), int(blue[index]))

    def set_color_at(self, index: int, color: Color) -> None:
        for channel, value in zip(self._channels, color):
            channel[index] = value

    def fill(self, color: Color) -> None:
        for channel, value in zip(self._channels, color):
            channel[:] = value

    def as_array(self) -> onp.ndarray:
        return onp.stack(self._channels, axis=1)

    @property
    def dtype(self) -> onp.dtype:
        return self._channels[0].dtype

    @property
    def layout(self) -> str:
        return "soa"

    def __iter__(self) -> Iterator[Color]:
        red, green, blue = (channel.tolist() for channel in self._channels)
        for r, g, b in zip(red, green, blue):
            yield Color(r, g, b)


def make_pixels(array: onp.ndarray, layout: str = "aos") -> PixelStore:
    """Wrap an ``(N, 3)`` array in the store for `layout`.

    The AoS store keeps a contiguous copy of `array`; the SoA store copies
    each column into its own channel array. Neither shares memory with
    `array`.
    """
    array = onp.asarray(array)
    if array.ndim != 2 or array.shape[1] != NUM_CHANNELS:
        raise ValueError(f"expected an (N, 3) array, got shape {array.shape}")
    if layout == "aos":
        return AosPixels(onp.ascontiguousarray(array).copy())
    if layout == "soa":
        return SoaPixels(*(array[:, c].copy() for c in range(NUM_CHANNELS)))
    raise ValueError(f"unknown pixel layout {layout!r}, expected one of {LAYOUTS}")


def pixels_from_colors(colors, dtype, layout: str = "aos") -> PixelStore:
    """Build a store from an iterable of color triplets."""
    array = onp.array(list(colors), dtype=dtype).reshape(-1, NUM_CHANNELS)
    return make_pixels(array, layout)
