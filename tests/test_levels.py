"""Tests for the maxlevel intensity rescale."""

import numpy as np
import pytest

from imtool.errors import InvalidArgument
from imtool.levels import maxlevel

from conftest import build_image


def test_small_to_large(four_color_image):
    scaled = maxlevel(four_color_image, 65535)

    assert (scaled.width, scaled.height, scaled.max_intensity) == (2, 2, 65535)
    assert scaled.pixels.dtype == np.uint16
    assert scaled.pixels.color_at(0) == (65535, 0, 0)
    assert scaled.pixels.color_at(3) == (65535, 65535, 0)


def test_small_to_small(four_color_image):
    scaled = maxlevel(four_color_image, 128)
    assert scaled.max_intensity == 128
    assert scaled.pixels.dtype == np.uint8
    assert scaled.pixels.color_at(1) == (0, 128, 0)


def test_large_to_small(layout):
    colors = [(65535, 0, 0), (0, 65535, 0), (0, 0, 65535), (65535, 65535, 0)]
    scaled = maxlevel(build_image(colors, 2, 2, 65535, layout), 255)

    assert scaled.max_intensity == 255
    assert scaled.pixels.dtype == np.uint8
    assert scaled.layout == layout
    assert scaled.pixels.color_at(2) == (0, 0, 255)


def test_large_to_large():
    colors = [(65535, 65535, 0)]
    scaled = maxlevel(build_image(colors, 1, 1, 65535), 32768)
    assert scaled.pixels.color_at(0) == (32768, 32768, 0)


def test_values_round_down():
    image = build_image([(100, 254, 1)], 1, 1, 255)
    # 100 * 10 / 255 = 3.9, 254 * 10 / 255 = 9.96
    assert maxlevel(image, 10).pixels.color_at(0) == (3, 9, 0)


def test_input_untouched(four_color_image):
    before = four_color_image.pixels.as_array()
    maxlevel(four_color_image, 10)
    assert np.array_equal(four_color_image.pixels.as_array(), before)


@pytest.mark.parametrize("new_max", [0, -1, 65536])
def test_invalid_max_level(four_color_image, new_max):
    with pytest.raises(InvalidArgument) as exc_info:
        maxlevel(four_color_image, new_max)
    assert exc_info.value.operation == "maxlevel"
    assert exc_info.value.value == new_max
