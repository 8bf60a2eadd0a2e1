"""
Configuration for the Tessellation Renderer

Two kinds of configuration live here:

- TessellationSettings: frozen run parameters (grid size, site count,
  seed, build method), fixed for the lifetime of a process.
- ActiveConfiguration: the mutable (metric, selector, dirty) bundle that
  the input layer changes at runtime and the builder consumes.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .geometry.metrics import DistanceMetric
from .geometry.selectors import ExtremumSelector


DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 1024
DEFAULT_NUM_SITES = 40

METRIC_KEYS: Dict[str, DistanceMetric] = {
    "1": DistanceMetric.EUCLIDEAN,
    "2": DistanceMetric.MANHATTAN,
    "3": DistanceMetric.MINIMAL,
    "4": DistanceMetric.CHEBYSHEV,
    "5": DistanceMetric.OCTAGONAL,
}

SELECTOR_KEYS: Dict[str, ExtremumSelector] = {
    "q": ExtremumSelector.NEAREST,
    "r": ExtremumSelector.FARTHEST,
}


@dataclass(frozen=True)
class TessellationSettings:
    """
    Run parameters.

    Attributes:
        width: Grid width in cells
        height: Grid height in cells
        num_sites: Number of random sites generated at startup
        seed: Random seed for site generation (None = non-deterministic)
        method: Build method - "scan", "vectorized" or "auto"
    """
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    num_sites: int = DEFAULT_NUM_SITES
    seed: Optional[int] = None
    method: str = "auto"

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Grid must be at least 1x1, got {self.width}x{self.height}")
        if self.num_sites < 1:
            raise ValueError("At least one site is required")


@dataclass
class ActiveConfiguration:
    """
    Currently selected metric and selector plus the dirty flag.

    Starts dirty so the first refresh always builds. Every mutator raises
    the flag, even when it re-selects the current value; only the builder
    clears it, after a successful rebuild.
    """
    metric: DistanceMetric = DistanceMetric.EUCLIDEAN
    selector: ExtremumSelector = ExtremumSelector.NEAREST
    dirty: bool = True

    def set_metric(self, metric: DistanceMetric) -> None:
        self.metric = metric
        self.dirty = True

    def set_selector(self, selector: ExtremumSelector) -> None:
        self.selector = selector
        self.dirty = True

    def mark_clean(self) -> None:
        self.dirty = False

    def apply_key(self, key: Optional[str]) -> bool:
        """
        Apply a key binding.

        Args:
            key: Key name as reported by the input layer (e.g. "1", "q")

        Returns:
            True if the key was bound and the configuration changed
        """
        if not key:
            return False
        key = key.lower()
        if key in METRIC_KEYS:
            self.set_metric(METRIC_KEYS[key])
            return True
        if key in SELECTOR_KEYS:
            self.set_selector(SELECTOR_KEYS[key])
            return True
        return False

    def describe(self) -> str:
        return f"metric={self.metric.value}, selector={self.selector.value}"


def describe_key_bindings() -> str:
    """Help text listing the key bindings."""
    lines = ["Key bindings:"]
    for key, metric in METRIC_KEYS.items():
        lines.append(f"  {key}  {metric.value}")
    for key, selector in SELECTOR_KEYS.items():
        lines.append(f"  {key}  {selector.value}")
    return "\n".join(lines)
