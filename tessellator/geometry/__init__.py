"""
Geometry Module for Tessellation

This module provides the classification core:
- Distance metrics (five variants, closed enumeration)
- Extremum selectors (nearest-wins, farthest-wins)
- Per-cell classifier (brute-force scan over the site set)
- Tessellation buffer builder (scan and vectorized methods)
"""

from .metrics import DistanceMetric
from .selectors import ExtremumSelector, ExtremumTracker
from .classifier import classify, find_winner
from .tessellation import rebuild, grid_positions, BUILD_METHODS

__all__ = [
    'DistanceMetric',
    'ExtremumSelector',
    'ExtremumTracker',
    'classify',
    'find_winner',
    'rebuild',
    'grid_positions',
    'BUILD_METHODS'
]
