"""Shared fixtures: small images in both pixel layouts."""

import numpy as np
import pytest

from imtool.color import Color, channel_dtype
from imtool.image import Image
from imtool.storage import pixels_from_colors

RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)
YELLOW = Color(255, 255, 0)


def build_image(colors, width, height, max_intensity=255, layout="aos"):
    pixels = pixels_from_colors(colors, channel_dtype(max_intensity), layout)
    return Image(width, height, max_intensity, pixels)


@pytest.fixture(params=["aos", "soa"])
def layout(request):
    """Run a test once per pixel layout."""
    return request.param


@pytest.fixture
def four_color_image(layout):
    """2x2 image with four distinct 8-bit colors."""
    return build_image([RED, GREEN, BLUE, YELLOW], 2, 2, 255, layout)


@pytest.fixture
def random_image(layout):
    """16x12 8-bit image drawn from a small set of colors with uneven frequencies."""
    rng = np.random.default_rng(1234)
    choices = rng.integers(0, 256, size=(20, 3))
    weights = np.arange(1, 21, dtype=np.float64)
    picks = rng.choice(20, size=16 * 12, p=weights / weights.sum())
    colors = [tuple(int(v) for v in choices[i]) for i in picks]
    return build_image(colors, 16, 12, 255, layout)
