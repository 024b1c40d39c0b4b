from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import numpy as onp

from .color import BYTE_ORDER, Color
from .errors import PaletteTooLarge

MAX_INDEX_SIZE_1B = 256
MAX_INDEX_SIZE_2B = 65536
MAX_INDEX_SIZE_4B = 2 ** 32


@dataclass
class Palette:
    """Unique colors in first-occurrence order plus the reverse lookup."""
    colors: list[Color] = field(default_factory=list)
    index_of: dict[Color, int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.colors)

    def add(self, color: Color) -> int:
        index = self.index_of.get(color)
        if index is None:
            index = len(self.colors)
            self.index_of[color] = index
            self.colors.append(color)
        return index


def build_palette(pixels: Iterable[Color]) -> Palette:
    # Row-major scan; a color's index is fixed by where it first shows up
    palette = Palette()
    for color in pixels:
        palette.add(color)
    return palette


def index_width(size: int) -> int:
    """Smallest index width in bytes (1, 2 or 4) that addresses `size` colors."""
    if size <= MAX_INDEX_SIZE_1B:
        return 1
    if size <= MAX_INDEX_SIZE_2B:
        return 2
    if size <= MAX_INDEX_SIZE_4B:
        return 4
    raise PaletteTooLarge(size)


def index_dtype(width: int) -> onp.dtype:
    return onp.dtype(f"{BYTE_ORDER}u{width}")


def palette_indices(pixels: Iterable[Color], palette: Palette) -> onp.ndarray:
    """Palette index of every pixel, in pixel order."""
    index_of = palette.index_of
    return onp.fromiter((index_of[color] for color in pixels), dtype=onp.int64)
