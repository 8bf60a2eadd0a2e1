"""
Extremum Selection Policy

Decides whether a candidate distance replaces the running best. Two
policies exist: nearest-wins and farthest-wins. Both use a strict
comparison, so on an exact tie the running best is kept and the site
seen first stays the winner. This makes the result independent of
anything but the Site Set order.

The very first candidate of a scan is always accepted. That seeds the
search without a +inf/-inf sentinel, which also means a lone NaN
distance is accepted rather than silently skipped.
"""

from enum import Enum
from typing import Optional, Union
import numpy as np


ArrayLike = Union[float, np.ndarray]


class ExtremumSelector(Enum):
    """Which extreme of the distance wins a cell."""
    NEAREST = "nearest"
    FARTHEST = "farthest"

    def improves(self, candidate: ArrayLike, best: ArrayLike) -> Union[bool, np.ndarray]:
        """
        Strict comparison of a candidate against the running best.

        Works elementwise on arrays, which lets a whole grid be updated
        with one call per site.
        """
        if self is ExtremumSelector.NEAREST:
            return candidate < best
        return candidate > best

    def tracker(self) -> "ExtremumTracker":
        """Create a fresh tracker with no running best."""
        return ExtremumTracker(self)

    @classmethod
    def from_name(cls, name: str) -> "ExtremumSelector":
        """
        Look up a selector by identifier ("nearest", "farthest", "min", "max").

        Raises:
            ValueError: If the name is not recognized
        """
        key = name.strip().lower()
        aliases = {"min": cls.NEAREST, "max": cls.FARTHEST}
        if key in aliases:
            return aliases[key]
        for member in cls:
            if key == member.value:
                return member
        raise ValueError(f"Unknown extremum selector: {name!r} (expected nearest or farthest)")


class ExtremumTracker:
    """
    Stateful reducer holding the running best of one scan.

    Example:
        >>> tracker = ExtremumSelector.NEAREST.tracker()
        >>> [tracker.evaluate(d) for d in [5, 2, 8, 2, 9]]
        [True, True, False, False, False]
        >>> tracker.best
        2

    One tracker belongs to one query cell; it must never be shared
    across cells.
    """

    def __init__(self, selector: ExtremumSelector):
        self.selector = selector
        self.best: Optional[float] = None

    def reset(self) -> None:
        """Forget the running best."""
        self.best = None

    def evaluate(self, candidate: float) -> bool:
        """
        Offer a candidate distance.

        Args:
            candidate: Distance of the site being scanned

        Returns:
            True if the candidate became the new running best
        """
        if self.best is None or self.selector.improves(candidate, self.best):
            self.best = candidate
            return True
        return False
