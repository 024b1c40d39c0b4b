"""Tests for bilinear resize."""

import numpy as np
import pytest

from imtool.errors import InvalidArgument
from imtool.resize import resize, source_coords

from conftest import build_image


def test_source_coords_downscale():
    low, high, weight = source_coords(2, 4)
    assert low.tolist() == [0, 3]
    assert high.tolist() == [0, 3]
    assert np.allclose(weight, [0.0, 0.0])


def test_source_coords_single_output():
    low, high, weight = source_coords(1, 5)
    assert low.tolist() == [0]
    assert high.tolist() == [0]
    assert weight.tolist() == [0.0]


def test_upscale_small(four_color_image):
    result = resize(four_color_image, 4, 4)

    assert (result.width, result.height) == (4, 4)
    assert result.max_intensity == 255
    top_row = [result.pixels.color_at(i) for i in range(4)]
    assert top_row == [(255, 0, 0), (170, 85, 0), (85, 170, 0), (0, 255, 0)]
    # Corners are copied from the source
    assert result.pixels.color_at(12) == (0, 0, 255)
    assert result.pixels.color_at(15) == (255, 255, 0)


def test_upscale_large():
    colors = [(65535, 0, 0), (0, 65535, 0), (0, 0, 65535), (65535, 65535, 0)]
    result = resize(build_image(colors, 2, 2, 65535), 4, 4)

    assert result.pixels.dtype == np.uint16
    top_row = [result.pixels.color_at(i) for i in range(4)]
    assert top_row == [(65535, 0, 0), (43690, 21845, 0), (21845, 43690, 0), (0, 65535, 0)]


def test_downscale_picks_corners():
    colors = [(i, 2 * i, 3 * i) for i in range(16)]
    result = resize(build_image(colors, 4, 4), 2, 2)
    assert list(result.pixels) == [(0, 0, 0), (3, 6, 9), (12, 24, 36), (15, 30, 45)]


def test_center_blend():
    colors = [(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0)]
    result = resize(build_image(colors, 2, 2), 3, 3)
    # Middle pixel averages the four corners: (510/4, 510/4, 255/4)
    assert result.pixels.color_at(4) == (127, 127, 63)


def test_same_size_is_identity(random_image):
    result = resize(random_image, random_image.width, random_image.height)
    assert np.array_equal(result.pixels.as_array(), random_image.pixels.as_array())


def test_layouts_agree(random_image):
    other = build_image(list(random_image.pixels), 16, 12, 255,
                        "soa" if random_image.layout == "aos" else "aos")
    a = resize(random_image, 7, 23)
    b = resize(other, 7, 23)
    assert a.layout == random_image.layout
    assert np.array_equal(a.pixels.as_array(), b.pixels.as_array())


@pytest.mark.parametrize("width, height", [(0, 2), (2, 0), (-1, 3)])
def test_invalid_size(four_color_image, width, height):
    with pytest.raises(InvalidArgument):
        resize(four_color_image, width, height)
