"""
Per-Cell Site Classification

For one query point, scan every site in order, measure it with the
active metric and offer the distance to the active selector. The last
site the selector accepted is the winner.

This is deliberately brute force: O(n) per query with no early exit and
no spatial pruning. With ~40 sites and rebuilds only on configuration
change that is cheap enough, and unlike a KD-tree it works for every
metric and for farthest-site queries alike.
"""

from typing import Tuple
import math

from ..data_models import Color, DEFAULT_COLOR, Point, SiteSet
from .metrics import DistanceMetric
from .selectors import ExtremumSelector


def find_winner(
    query: Point,
    sites: SiteSet,
    metric: DistanceMetric,
    selector: ExtremumSelector
) -> Tuple[int, float]:
    """
    Find the site selected for a query point.

    Args:
        query: Query point (x, y)
        sites: Sites to scan, in tie-break order
        metric: Distance function
        selector: Nearest- or farthest-wins policy

    Returns:
        Tuple of (index of winning site, its distance), or (-1, nan)
        when the site set is empty

    Complexity:
        Time: O(n) where n = number of sites
        Space: O(1)
    """
    tracker = selector.tracker()
    best_idx = -1

    for i, site in enumerate(sites):
        d = metric.distance(query, site.position)
        if tracker.evaluate(d):
            best_idx = i

    if best_idx < 0:
        return -1, math.nan
    return best_idx, tracker.best


def classify(
    query: Point,
    sites: SiteSet,
    metric: DistanceMetric,
    selector: ExtremumSelector
) -> Color:
    """
    Color of the site that owns a query point.

    Example:
        >>> red, blue = (1.0, 0.0, 0.0, 1.0), (0.0, 0.0, 1.0, 1.0)
        >>> sites = make_sites([((0, 0), red), ((10, 0), blue)])
        >>> classify((3, 0), sites, DistanceMetric.EUCLIDEAN, ExtremumSelector.NEAREST)
        (1.0, 0.0, 0.0, 1.0)

    Returns opaque black when the site set is empty; callers are expected
    to always supply at least one site.
    """
    idx, _ = find_winner(query, sites, metric, selector)
    if idx < 0:
        return DEFAULT_COLOR
    return sites[idx].color
