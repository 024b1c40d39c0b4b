"""Color model: channel triplets, channel width and distance."""

from __future__ import annotations

from typing import NamedTuple

import numpy as onp

MAX_INTENSITY_8BIT = 255
MAX_INTENSITY = 65535
NUM_CHANNELS = 3


class Color(NamedTuple):
    """One pixel value. Tuple equality, hashing and ordering apply."""
    r: int
    g: int
    b: int


BLACK = Color(0, 0, 0)


def squared_distance(a: Color, b: Color) -> int:
    # Python ints do not overflow, 3 * 65535**2 fits without widening
    dr = a[0] - b[0]
    dg = a[1] - b[1]
    db = a[2] - b[2]
    return dr * dr + dg * dg + db * db


def channel_bits(max_intensity: int) -> int:
    return 8 if max_intensity <= MAX_INTENSITY_8BIT else 16


def channel_bytes(max_intensity: int) -> int:
    return channel_bits(max_intensity) // 8


def channel_dtype(max_intensity: int) -> onp.dtype:
    """Numpy dtype that stores one channel of an image with this max value."""
    return onp.dtype(onp.uint8 if max_intensity <= MAX_INTENSITY_8BIT else onp.uint16)


# Multi-byte channels and indices are written little-endian
BYTE_ORDER = "<"


def wire_dtype(max_intensity: int) -> onp.dtype:
    """Dtype of one channel as it appears in P6 and C6 files."""
    if max_intensity <= MAX_INTENSITY_8BIT:
        return onp.dtype("u1")
    return onp.dtype(BYTE_ORDER + "u2")
