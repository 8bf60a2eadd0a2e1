"""
Distance Metrics for Tessellation

This module provides the closed family of distance functions used to
decide which site owns a grid cell. Every metric is written in terms of
the coordinate offsets (dx, dy) using NumPy ufuncs, so the same code
serves a single scalar query and a whole grid of queries at once. Both
paths therefore perform identical arithmetic and give bit-identical
results.

Metrics:
    EUCLIDEAN:  sqrt(dx² + dy²)
    MANHATTAN:  |dx| + |dy|
    CHEBYSHEV:  max(|dx|, |dy|)
    MINIMAL:    min(|dx|, |dy|)
    OCTAGONAL:  (1007/1024)·max(|dx|, |dy|) + (441/1024)·min(|dx|, |dy|)

Note on MINIMAL:
    min(|dx|, |dy|) is not a true metric. Any two points sharing an x or
    y coordinate are at distance 0, so identity of indiscernibles and the
    triangle inequality both fail. It is kept for the star-shaped regions
    it produces.

Note on OCTAGONAL:
    The weighted blend of Chebyshev and minimal distance approximates the
    Euclidean distance without a square root, from about 1.7% under to
    7.4% over. The weights sum to ~1.41, so it is not a convex
    combination: it can exceed the Chebyshev distance (dx == dy gives
    ~1.414·|dx|) but never the Manhattan distance.

All metrics are symmetric, nonnegative for finite input and zero when
both points coincide. No bounds checking is done; NaN/inf propagate.
"""

from enum import Enum
from typing import Callable, Dict, Union
import numpy as np

from ..data_models import Point, Site


ArrayLike = Union[float, np.ndarray]

OCTAGONAL_MAX_WEIGHT = 1007.0 / 1024.0
OCTAGONAL_MIN_WEIGHT = 441.0 / 1024.0


def euclidean(dx: ArrayLike, dy: ArrayLike) -> ArrayLike:
    return np.sqrt(dx * dx + dy * dy)


def manhattan(dx: ArrayLike, dy: ArrayLike) -> ArrayLike:
    return np.abs(dx) + np.abs(dy)


def chebyshev(dx: ArrayLike, dy: ArrayLike) -> ArrayLike:
    return np.maximum(np.abs(dx), np.abs(dy))


def minimal(dx: ArrayLike, dy: ArrayLike) -> ArrayLike:
    return np.minimum(np.abs(dx), np.abs(dy))


def octagonal(dx: ArrayLike, dy: ArrayLike) -> ArrayLike:
    """Fast square-root free approximation of the Euclidean distance."""
    return OCTAGONAL_MAX_WEIGHT * chebyshev(dx, dy) + OCTAGONAL_MIN_WEIGHT * minimal(dx, dy)


class DistanceMetric(Enum):
    """Selectable distance functions, addressed by a stable identifier."""
    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"
    CHEBYSHEV = "chebyshev"
    MINIMAL = "minimal"
    OCTAGONAL = "octagonal-approx"

    @property
    def function(self) -> Callable[[ArrayLike, ArrayLike], ArrayLike]:
        """The offset function (dx, dy) -> distance for this metric."""
        return _METRIC_FUNCTIONS[self]

    def distance(self, a: Point, b: Point) -> float:
        """
        Distance between two points.

        Args:
            a: First point (x, y)
            b: Second point (x, y)

        Returns:
            Nonnegative distance as a Python float

        Complexity: O(1)
        """
        return float(self.function(a[0] - b[0], a[1] - b[1]))

    def distance_field(self, xs: np.ndarray, ys: np.ndarray, site: Site) -> np.ndarray:
        """
        Distance from every grid cell to one site.

        Args:
            xs: Column of x coordinates, shape (w, 1)
            ys: Row of y coordinates, shape (1, h)
            site: Site to measure against

        Returns:
            Array of shape (w, h) after broadcasting

        Complexity: O(w × h)
        """
        return self.function(xs - site.x, ys - site.y)

    @classmethod
    def from_name(cls, name: str) -> "DistanceMetric":
        """
        Look up a metric by identifier.

        Accepts the value ("octagonal-approx"), the member name
        ("OCTAGONAL", case-insensitive) or one of the aliases
        "maximal" and "approx".

        Raises:
            ValueError: If the name is not recognized
        """
        key = name.strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        for member in cls:
            if key == member.value or key == member.name.lower():
                return member
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown distance metric: {name!r} (expected one of {valid})")


_METRIC_FUNCTIONS: Dict[DistanceMetric, Callable[[ArrayLike, ArrayLike], ArrayLike]] = {
    DistanceMetric.EUCLIDEAN: euclidean,
    DistanceMetric.MANHATTAN: manhattan,
    DistanceMetric.CHEBYSHEV: chebyshev,
    DistanceMetric.MINIMAL: minimal,
    DistanceMetric.OCTAGONAL: octagonal,
}

_ALIASES: Dict[str, DistanceMetric] = {
    "maximal": DistanceMetric.CHEBYSHEV,
    "approx": DistanceMetric.OCTAGONAL,
    "euclidian": DistanceMetric.EUCLIDEAN,
}
