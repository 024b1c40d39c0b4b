"""Bilinear-interpolation resize."""

from __future__ import annotations

import numpy as onp

from .color import NUM_CHANNELS, channel_dtype
from .errors import InvalidArgument
from .image import Image
from .storage import make_pixels


def source_coords(out_size: int, in_size: int) -> tuple[onp.ndarray, onp.ndarray, onp.ndarray]:
    """Low/high source indices and blend weight for every output position.

    Output position ``i`` samples ``i * (in_size - 1) / (out_size - 1)`` in the
    source; a single output row or column samples position 0.
    """
    ratio = (in_size - 1) / (out_size - 1) if out_size > 1 else 0.0
    coord = onp.arange(out_size, dtype=onp.float64) * ratio
    low = onp.floor(coord)
    high = onp.ceil(coord)
    weight = coord - low
    low = onp.clip(low.astype(onp.intp), 0, in_size - 1)
    high = onp.clip(high.astype(onp.intp), 0, in_size - 1)
    return low, high, weight


def resize(image: Image, width: int, height: int) -> Image:
    if width < 1:
        raise InvalidArgument("resize width", width)
    if height < 1:
        raise InvalidArgument("resize height", height)

    src = image.to_array().astype(onp.float64)
    x_low, x_high, x_weight = source_coords(width, image.width)
    y_low, y_high, y_weight = source_coords(height, image.height)
    x_weight = x_weight[None, :, None]
    y_weight = y_weight[:, None, None]

    c00 = src[y_low[:, None], x_low[None, :]]
    c10 = src[y_low[:, None], x_high[None, :]]
    c01 = src[y_high[:, None], x_low[None, :]]
    c11 = src[y_high[:, None], x_high[None, :]]

    top = c00 * (1 - x_weight) + c10 * x_weight
    bottom = c01 * (1 - x_weight) + c11 * x_weight
    blended = top * (1 - y_weight) + bottom * y_weight

    # Clamp, then truncate toward zero
    blended = onp.clip(blended, 0.0, float(image.max_intensity))
    out = blended.astype(channel_dtype(image.max_intensity)).reshape(-1, NUM_CHANNELS)
    return Image(width, height, image.max_intensity, make_pixels(out, image.layout))
