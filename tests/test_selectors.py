"""
Tests for Extremum Selection

This module tests the nearest-wins and farthest-wins policies and the
stateful tracker that applies them during a scan.

Run with: pytest tests/test_selectors.py -v
"""

import pytest
import numpy as np

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tessellator.geometry.selectors import ExtremumSelector, ExtremumTracker


def winning_index(selector, candidates):
    """Index of the last accepted candidate, as the classifier tracks it."""
    tracker = selector.tracker()
    winner = -1
    for i, d in enumerate(candidates):
        if tracker.evaluate(d):
            winner = i
    return winner


class TestTracker:
    """Tests for the running-best reducer."""

    def test_first_candidate_always_accepted(self):
        for selector in ExtremumSelector:
            tracker = ExtremumTracker(selector)
            assert tracker.best is None
            assert tracker.evaluate(123.0) is True
            assert tracker.best == 123.0

    def test_nearest_sequence(self):
        tracker = ExtremumSelector.NEAREST.tracker()
        accepted = [tracker.evaluate(d) for d in [5, 2, 8, 2, 9]]
        assert accepted == [True, True, False, False, False]
        assert tracker.best == 2

    def test_farthest_sequence(self):
        tracker = ExtremumSelector.FARTHEST.tracker()
        accepted = [tracker.evaluate(d) for d in [5, 2, 8, 2, 9]]
        assert accepted == [True, False, True, False, True]
        assert tracker.best == 9

    def test_nearest_picks_first_minimum(self):
        """Ties keep the earlier candidate: index 1, not index 3."""
        assert winning_index(ExtremumSelector.NEAREST, [5, 2, 8, 2, 9]) == 1

    def test_farthest_picks_maximum(self):
        assert winning_index(ExtremumSelector.FARTHEST, [5, 2, 8, 2, 9]) == 4

    def test_farthest_tie_keeps_first(self):
        assert winning_index(ExtremumSelector.FARTHEST, [3, 9, 1, 9]) == 1

    def test_all_equal_keeps_first(self):
        for selector in ExtremumSelector:
            assert winning_index(selector, [4.0, 4.0, 4.0]) == 0

    def test_reset(self):
        tracker = ExtremumSelector.NEAREST.tracker()
        tracker.evaluate(1.0)
        tracker.reset()
        assert tracker.best is None
        assert tracker.evaluate(50.0) is True

    def test_trackers_are_independent(self):
        a = ExtremumSelector.NEAREST.tracker()
        b = ExtremumSelector.NEAREST.tracker()
        a.evaluate(1.0)
        assert b.best is None


class TestImproves:
    """Tests for the strict comparison."""

    def test_scalar(self):
        assert ExtremumSelector.NEAREST.improves(1.0, 2.0)
        assert not ExtremumSelector.NEAREST.improves(2.0, 2.0)
        assert ExtremumSelector.FARTHEST.improves(3.0, 2.0)
        assert not ExtremumSelector.FARTHEST.improves(2.0, 2.0)

    def test_array(self):
        candidate = np.array([1.0, 2.0, 3.0])
        best = np.array([2.0, 2.0, 2.0])
        assert list(ExtremumSelector.NEAREST.improves(candidate, best)) == [True, False, False]
        assert list(ExtremumSelector.FARTHEST.improves(candidate, best)) == [False, False, True]


class TestFromName:
    """Tests for selector lookup."""

    def test_values(self):
        assert ExtremumSelector.from_name("nearest") is ExtremumSelector.NEAREST
        assert ExtremumSelector.from_name("Farthest") is ExtremumSelector.FARTHEST

    def test_aliases(self):
        assert ExtremumSelector.from_name("min") is ExtremumSelector.NEAREST
        assert ExtremumSelector.from_name("max") is ExtremumSelector.FARTHEST

    def test_unknown(self):
        with pytest.raises(ValueError):
            ExtremumSelector.from_name("median")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
