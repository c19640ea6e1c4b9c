"""Geometry kernels and spatial indexing for positioned text."""

from __future__ import annotations

import math
from typing import Any, List, Protocol, Sequence, Tuple

# the below ignores are due to `numba` constraints
# pyright: reportUnknownMemberType=false
# pyright: reportUntypedFunctionDecorator=false
import numba  # type: ignore
import numpy as np
from scipy.spatial import cKDTree  # type: ignore

Point = Tuple[float, float]


@numba.jit(nopython=True, cache=True)
def occupancy_histogram_numba(
    lefts: np.ndarray[Any, np.dtype[np.float64]],
    rights: np.ndarray[Any, np.dtype[np.float64]],
    width: float,
    slices: int,
) -> np.ndarray[Any, np.dtype[np.int64]]:  # type: ignore
    """Count, per bucket, the horizontal extents covering it."""
    counts = np.zeros(slices, dtype=np.int64)
    for k in range(lefts.shape[0]):
        left = math.floor(slices * lefts[k] / width)
        right = math.floor(slices * rights[k] / width)
        if left < 0:
            left = 0
        if right > slices:
            right = slices
        for i in range(left, right):
            counts[i] += 1
    return counts


@numba.jit(nopython=True, cache=True)
def local_minima_numba(
    values: np.ndarray[Any, np.dtype[np.int64]],
) -> np.ndarray[Any, np.dtype[np.int64]]:  # type: ignore
    """Indices where the scan turns from non-ascending to ascending.

    A plateau reports its first index. A run that starts by ascending reports
    index 0.
    """
    result = np.empty(values.shape[0], dtype=np.int64)
    found = 0
    min_idx = 0
    direction = 0  # 1 ascending, -1 descending
    for i in range(values.shape[0]):
        if values[i] < values[min_idx]:
            min_idx = i
            direction = -1
        elif values[i] > values[min_idx]:
            if direction != 1:
                result[found] = min_idx
                found += 1
            # the next minimum has to undercut this value
            min_idx = i
            direction = 1
    return result[:found]


def occupancy_histogram(
    extents: Sequence[Tuple[float, float]], width: float, slices: int
) -> np.ndarray[Any, np.dtype[np.int64]]:
    """Histogram of ``(left, right)`` extents over ``[0, width)``."""
    if not extents:
        return np.zeros(slices, dtype=np.int64)
    array = np.asarray(extents, dtype=np.float64)
    return occupancy_histogram_numba(
        np.ascontiguousarray(array[:, 0]),
        np.ascontiguousarray(array[:, 1]),
        float(width),
        int(slices),
    )


def find_local_minima(values: Sequence[int]) -> List[int]:
    """Python-facing wrapper around :func:`local_minima_numba`."""
    array = np.asarray(values, dtype=np.int64)
    if array.size == 0:
        return []
    return [int(i) for i in local_minima_numba(array)]


class SpatialIndex(Protocol):
    """Anything that can answer fixed-radius neighbour queries."""

    def radius_search(self, point: Point, radius: float) -> List[int]:
        """Return indices of the points within ``radius`` of ``point``."""
        ...


class KDTreeIndex:
    """2-d point index backed by :class:`scipy.spatial.cKDTree`.

    The radius is inclusive. Results are returned in ascending index order.
    """

    def __init__(self, points: Sequence[Point]) -> None:
        self._size = len(points)
        self._tree = (
            cKDTree(np.asarray(points, dtype=np.float64).reshape(-1, 2))
            if self._size
            else None
        )

    def __len__(self) -> int:
        return self._size

    def radius_search(self, point: Point, radius: float) -> List[int]:
        if self._tree is None or radius < 0:
            return []
        return sorted(int(i) for i in self._tree.query_ball_point(point, radius))


__all__ = [
    "KDTreeIndex",
    "SpatialIndex",
    "find_local_minima",
    "local_minima_numba",
    "occupancy_histogram",
    "occupancy_histogram_numba",
]
