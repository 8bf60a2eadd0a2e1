"""
Random Site Generator

All sites are generated synthetically at startup; nothing is loaded from
disk. Positions are uniform over [0, x_range) × [0, y_range), the RGB
channels are uniform over [0, 1) and alpha is fixed at 1.0.

Example Usage:
    >>> from tessellator.synthetic_sites import generate_sites
    >>> sites = generate_sites(count=40, x_range=1024, y_range=1024, seed=42)
    >>> len(sites)
    40
"""

from typing import Optional
import numpy as np

from .data_models import Site, SiteSet


def generate_sites(
    count: int = 40,
    x_range: float = 1024.0,
    y_range: float = 1024.0,
    seed: Optional[int] = None
) -> SiteSet:
    """
    Generate a random, immutable site set.

    Args:
        count: Number of sites (must be at least 1)
        x_range: Exclusive upper bound of x coordinates
        y_range: Exclusive upper bound of y coordinates
        seed: Random seed for reproducibility

    Returns:
        SiteSet with ``count`` sites in generation order

    Raises:
        ValueError: If count < 1 or a range is not positive

    Complexity:
        Time: O(count)
        Space: O(count)
    """
    if count < 1:
        raise ValueError("Site set cannot be empty")
    if x_range <= 0 or y_range <= 0:
        raise ValueError(f"Ranges must be positive, got {x_range} x {y_range}")

    if seed is not None:
        np.random.seed(seed)

    # Per site: x, y, r, g, b drawn in that order
    draws = np.random.random_sample((count, 5))

    sites = []
    for x, y, r, g, b in draws:
        sites.append(Site(
            x=float(x * x_range),
            y=float(y * y_range),
            color=(float(r), float(g), float(b), 1.0)
        ))

    return SiteSet(tuple(sites))
