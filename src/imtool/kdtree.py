"""Arena k-d tree over colors.

The tree is a single list rearranged in place: the node of the range
``[left, right)`` is the element at ``mid = left + (right - left) // 2``, its
children are the ranges ``[left, mid)`` and ``[mid + 1, right)``, and the
split axis cycles through the three channels with depth.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from .color import Color, NUM_CHANNELS, squared_distance

# Ranges this small are finished with an insertion sort
_INSERTION_THRESHOLD = 3


def select(points: list, first: int, nth: int, last: int, axis: int) -> None:
    """Partially order ``points[first:last]`` around position `nth` on `axis`.

    Afterwards ``points[nth]`` holds the element a full sort would put there,
    nothing before it is larger and nothing after it is smaller. Introselect:
    median-of-three pivot moved to the front, unguarded Hoare partition, and
    a stable sort of what is left once the range is small or the depth budget
    runs out.
    """
    if first == last or nth == last:
        return
    depth_limit = 2 * ((last - first).bit_length() - 1)
    while last - first > _INSERTION_THRESHOLD:
        if depth_limit == 0:
            points[first:last] = sorted(points[first:last], key=lambda p: p[axis])
            return
        depth_limit -= 1
        cut = _partition_pivot(points, first, last, axis)
        if cut <= nth:
            first = cut
        else:
            last = cut
    _insertion_sort(points, first, last, axis)


def _partition_pivot(points: list, first: int, last: int, axis: int) -> int:
    mid = first + (last - first) // 2
    _move_median_to_first(points, first, first + 1, mid, last - 1, axis)
    return _unguarded_partition(points, first + 1, last, first, axis)


def _move_median_to_first(points: list, result: int, a: int, b: int, c: int, axis: int) -> None:
    ka, kb, kc = points[a][axis], points[b][axis], points[c][axis]
    if ka < kb:
        if kb < kc:
            pick = b
        elif ka < kc:
            pick = c
        else:
            pick = a
    elif ka < kc:
        pick = a
    elif kb < kc:
        pick = c
    else:
        pick = b
    points[result], points[pick] = points[pick], points[result]


def _unguarded_partition(points: list, first: int, last: int, pivot: int, axis: int) -> int:
    # The pivot sits just before `first` and is never swapped
    pivot_key = points[pivot][axis]
    while True:
        while points[first][axis] < pivot_key:
            first += 1
        last -= 1
        while pivot_key < points[last][axis]:
            last -= 1
        if not first < last:
            return first
        points[first], points[last] = points[last], points[first]
        first += 1


def _insertion_sort(points: list, first: int, last: int, axis: int) -> None:
    for i in range(first + 1, last):
        value = points[i]
        key = value[axis]
        j = i
        while j > first and key < points[j - 1][axis]:
            points[j] = points[j - 1]
            j -= 1
        points[j] = value


@dataclass
class _Best:
    color: Optional[Color] = None
    distance: float = math.inf


class KDTree:
    """Nearest-color index over a fixed set of colors."""

    def __init__(self, colors: Iterable[Color]) -> None:
        self.points: list[Color] = list(colors)
        self._build(0, len(self.points), 0)

    def __len__(self) -> int:
        return len(self.points)

    def _build(self, left: int, right: int, depth: int) -> None:
        if left >= right:
            return
        axis = depth % NUM_CHANNELS
        mid = left + (right - left) // 2
        select(self.points, left, mid, right, axis)
        self._build(left, mid, depth + 1)
        self._build(mid + 1, right, depth + 1)

    def nearest(self, target: Color) -> Color:
        """Closest stored color by squared distance; the first one found wins ties."""
        if not self.points:
            raise ValueError("nearest() on an empty KDTree")
        best = _Best()
        self._search(target, 0, len(self.points), 0, best)
        return best.color

    def _search(self, target: Color, left: int, right: int, depth: int, best: _Best) -> None:
        if left >= right:
            return
        axis = depth % NUM_CHANNELS
        mid = left + (right - left) // 2
        pivot = self.points[mid]
        distance = squared_distance(target, pivot)
        if distance < best.distance:
            best.color = pivot
            best.distance = distance

        diff = target[axis] - pivot[axis]
        if diff <= 0:
            near, far = (left, mid), (mid + 1, right)
        else:
            near, far = (mid + 1, right), (left, mid)
        self._search(target, near[0], near[1], depth + 1, best)
        if diff * diff < best.distance:
            self._search(target, far[0], far[1], depth + 1, best)
