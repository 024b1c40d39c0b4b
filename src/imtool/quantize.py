"""Frequency-based color reduction ("cutfreq").

The least frequent colors of an image are replaced by the closest color that
survives, found through a k-d tree over the surviving colors.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from .color import BLACK, Color
from .errors import InvalidArgument
from .image import Image
from .kdtree import KDTree


def color_frequencies(pixels: Iterable[Color]) -> Counter:
    return Counter(pixels)


def removal_order(frequencies: Counter) -> list[Color]:
    """Distinct colors, least frequent first.

    Ties go to the larger channel 2, then channel 1, then channel 0.
    """
    return sorted(
        frequencies,
        key=lambda color: (frequencies[color], -color[2], -color[1], -color[0]),
    )


def split_colors(frequencies: Counter, count: int) -> tuple[list[Color], list[Color]]:
    """Split the distinct colors into the `count` to remove and the ones to keep."""
    ordered = removal_order(frequencies)
    cut = min(count, len(ordered))
    return ordered[:cut], ordered[cut:]


def replacement_map(remove: Iterable[Color], tree: KDTree) -> dict[Color, Color]:
    return {color: tree.nearest(color) for color in remove}


def quantize(image: Image, count: int) -> Image:
    """Remove the `count` least frequent colors of `image` in place.

    Every pixel of a removed color takes the nearest kept color by squared
    distance. When nothing would be left to map onto (`count` reaches the
    pixel count or the number of distinct colors) the whole image turns
    black. Returns `image`.
    """
    if count < 0:
        raise InvalidArgument("cutfreq", count, "must not be negative")
    if count == 0:
        return image

    pixels = image.pixels
    if count >= len(pixels):
        pixels.fill(BLACK)
        return image

    frequencies = color_frequencies(pixels)
    if count >= len(frequencies):
        pixels.fill(BLACK)
        return image

    remove, keep = split_colors(frequencies, count)
    mapping = replacement_map(remove, KDTree(keep))

    # The map is complete before the first pixel changes
    for index, color in enumerate(pixels):
        replacement = mapping.get(color)
        if replacement is not None:
            pixels.set_color_at(index, replacement)
    return image
