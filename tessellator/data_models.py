"""
Data Models for the Tessellation Renderer

This module defines the core data structures used throughout the system.
Uses Python dataclasses for clean, type-hinted data containers.

Data Flow:
    Site → SiteSet → (classifier / builder) → TessellationBuffer
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple
import numpy as np


Point = Tuple[float, float]
Color = Tuple[float, float, float, float]

# Returned when there is nothing to classify against
DEFAULT_COLOR: Color = (0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Site:
    """
    A colored reference point that competes to own grid cells.

    Attributes:
        x: Horizontal position (grid units)
        y: Vertical position (grid units)
        color: RGBA tuple, channels conventionally in [0, 1] (not clamped)
    """
    x: float
    y: float
    color: Color = DEFAULT_COLOR

    @property
    def position(self) -> Point:
        return (self.x, self.y)


@dataclass(frozen=True)
class SiteSet:
    """
    Ordered, immutable collection of sites.

    The order matters: when two sites tie under the active metric, the
    one that appears first wins.

    Attributes:
        sites: Tuple of Site objects in scan order

    Space Complexity: O(n) where n = number of sites
    """
    sites: Tuple[Site, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable but always store a tuple
        object.__setattr__(self, "sites", tuple(self.sites))

    def __len__(self) -> int:
        return len(self.sites)

    def __iter__(self) -> Iterator[Site]:
        return iter(self.sites)

    def __getitem__(self, index: int) -> Site:
        return self.sites[index]

    def get_points_array(self) -> np.ndarray:
        """
        Extract all positions as a NumPy array for vectorized operations.

        Returns:
            np.ndarray: Shape (n, 2) array of (x, y) coordinates

        Complexity: O(n) time, O(n) space
        """
        return np.array([[s.x, s.y] for s in self.sites], dtype=np.float64).reshape(-1, 2)

    def get_colors_array(self) -> np.ndarray:
        """Get site colors as an (n, 4) array."""
        return np.array([s.color for s in self.sites], dtype=np.float64).reshape(-1, 4)


@dataclass
class TessellationBuffer:
    """
    Dense per-cell color buffer produced by a rebuild.

    Entries are stored x-major: the outer loop runs over x and the inner
    loop over y, so entry ``i`` sits at ``(i // height, i % height)``.

    Attributes:
        width: Grid width in cells
        height: Grid height in cells
        positions: Shape (width * height, 2) -> cell coordinates
        colors: Shape (width * height, 4) -> RGBA of the winning site
        owners: Shape (width * height,) -> index of the winning site, -1 if none

    Usage:
        >>> for position, color in buffer:
        ...     draw(position, color)
    """
    width: int
    height: int
    positions: np.ndarray
    colors: np.ndarray
    owners: np.ndarray

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self) -> Iterator[Tuple[Point, Color]]:
        for pos, color in zip(self.positions, self.colors):
            yield (float(pos[0]), float(pos[1])), tuple(float(c) for c in color)

    def to_image(self) -> np.ndarray:
        """
        Reshape the buffer into an image array.

        Returns:
            np.ndarray: Shape (height, width, 4), indexed [y, x]
        """
        return self.colors.reshape(self.width, self.height, 4).transpose(1, 0, 2)

    def owner_grid(self) -> np.ndarray:
        """Owner indices as a (height, width) array, indexed [y, x]."""
        return self.owners.reshape(self.width, self.height).T

    def tobytes(self) -> bytes:
        """Raw bytes of positions, colors and owners, for exact comparison."""
        return self.positions.tobytes() + self.colors.tobytes() + self.owners.tobytes()

    def get_region_sizes(self) -> Dict[int, int]:
        """
        Count the cells owned by each site.

        Returns:
            Dict mapping site index -> number of cells; sites that own
            nothing are absent

        Complexity: O(N) where N is the number of cells
        """
        indices, counts = np.unique(self.owners, return_counts=True)
        return {int(i): int(c) for i, c in zip(indices, counts) if i >= 0}

    def summary(self) -> str:
        """Generate human-readable summary."""
        sizes = self.get_region_sizes()
        lines = [
            f"Grid:          {self.width} x {self.height}",
            f"Cells:         {len(self)}",
            f"Owning sites:  {len(sizes)}",
        ]
        if sizes:
            largest = max(sizes, key=lambda i: sizes[i])
            lines.append(f"Largest region: site {largest} ({sizes[largest]} cells)")
        return "\n".join(lines)


def make_sites(entries: List[Tuple[Point, Color]]) -> SiteSet:
    """Build a SiteSet from ``[((x, y), color), ...]`` pairs."""
    return SiteSet(tuple(
        Site(x=float(pos[0]), y=float(pos[1]), color=tuple(float(c) for c in color))
        for pos, color in entries
    ))
