"""Tests for the arena k-d tree."""

import random

import pytest

from imtool.color import Color, squared_distance
from imtool.kdtree import KDTree, select

from conftest import GREEN, RED, YELLOW


def _random_colors(n, seed, high=255):
    rng = random.Random(seed)
    return [Color(rng.randint(0, high), rng.randint(0, high), rng.randint(0, high)) for _ in range(n)]


@pytest.mark.parametrize("axis", [0, 1, 2])
@pytest.mark.parametrize("n", [4, 5, 17, 64, 301])
def test_select_places_median(axis, n):
    """After select, the middle slot holds the median and splits the range."""
    points = _random_colors(n, seed=n + axis)
    original = sorted(points)
    mid = n // 2

    select(points, 0, mid, n, axis)

    keys = sorted(p[axis] for p in original)
    assert sorted(points) == original  # still a permutation
    assert points[mid][axis] == keys[mid]
    assert all(p[axis] <= points[mid][axis] for p in points[:mid])
    assert all(p[axis] >= points[mid][axis] for p in points[mid + 1:])


def test_select_subrange_leaves_rest_alone():
    points = _random_colors(20, seed=7)
    before = list(points)
    select(points, 5, 10, 15, 1)

    assert points[:5] == before[:5]
    assert points[15:] == before[15:]
    assert sorted(points[5:15]) == sorted(before[5:15])


def test_select_small_range_is_stable():
    """Ranges of three or fewer are insertion sorted, keeping equal keys in order."""
    points = [YELLOW, GREEN, RED]
    select(points, 0, 1, 3, 0)
    assert points == [GREEN, YELLOW, RED]


def test_select_many_equal_keys():
    points = [Color(7, i, 0) for i in range(40)]
    select(points, 0, 20, 40, 0)
    assert sorted(points) == [Color(7, i, 0) for i in range(40)]


def test_tree_is_permutation_of_input():
    colors = _random_colors(100, seed=3)
    tree = KDTree(colors)
    assert len(tree) == 100
    assert sorted(tree.points) == sorted(colors)


@pytest.mark.parametrize("seed", range(5))
def test_nearest_matches_brute_force(seed):
    """The tree finds a color at the minimal squared distance."""
    keep = _random_colors(200, seed=seed, high=65535)
    targets = _random_colors(50, seed=100 + seed, high=65535)
    tree = KDTree(keep)

    for target in targets:
        found = tree.nearest(target)
        best = min(squared_distance(target, c) for c in keep)
        assert found in keep
        assert squared_distance(target, found) == best


def test_nearest_exact_match():
    colors = _random_colors(30, seed=11)
    tree = KDTree(colors)
    for color in colors:
        assert tree.nearest(color) == color


def test_nearest_single_point():
    tree = KDTree([RED])
    assert tree.nearest(Color(0, 0, 0)) == RED


def test_nearest_tie_resolves_by_traversal():
    """Blue is equally far from red and green; the first found under traversal wins."""
    tree = KDTree([YELLOW, GREEN, RED])
    # Median split on red puts yellow at the root, green is visited next
    assert tree.points == [GREEN, YELLOW, RED]
    assert tree.nearest(Color(0, 0, 255)) == GREEN


def test_nearest_on_empty_tree():
    with pytest.raises(ValueError):
        KDTree([]).nearest(RED)
