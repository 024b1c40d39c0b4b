"""Intensity range rescaling ("maxlevel")."""

from __future__ import annotations

import numpy as onp

from .color import MAX_INTENSITY, channel_dtype
from .errors import InvalidArgument
from .image import Image
from .storage import make_pixels


def maxlevel(image: Image, new_max: int) -> Image:
    """Return a copy of `image` rescaled to the range ``0..new_max``.

    Each channel becomes ``value * new_max // max_intensity``. The channel
    width follows `new_max`, so 8-bit images can widen to 16 bit and back.
    """
    if not (1 <= new_max <= MAX_INTENSITY):
        raise InvalidArgument("maxlevel", new_max, f"must be in 1..{MAX_INTENSITY}")
    arr = image.pixels.as_array().astype(onp.uint64)
    scaled = (arr * new_max) // image.max_intensity
    pixels = make_pixels(scaled.astype(channel_dtype(new_max)), image.layout)
    return Image(image.width, image.height, new_max, pixels)
