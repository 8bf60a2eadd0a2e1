"""
Dirty-Flag Driven Tessellation Engine

Owns everything that persists between frames: the site set, the grid
size, the ActiveConfiguration and the most recent buffer. The input
layer mutates the configuration; the frame loop calls refresh(), which
rebuilds the buffer only when the configuration is dirty.
"""

from typing import Optional

from .config import ActiveConfiguration, TessellationSettings
from .data_models import SiteSet, TessellationBuffer
from .geometry.metrics import DistanceMetric
from .geometry.selectors import ExtremumSelector
from .geometry.tessellation import rebuild
from .hpc.timing import Timer
from .synthetic_sites import generate_sites


class Tessellator:
    """
    Holds the render state and rebuilds the buffer on demand.

    Attributes:
        sites: Immutable site set, generated once
        width: Grid width in cells
        height: Grid height in cells
        config: Active metric/selector and dirty flag
        method: Build method passed through to rebuild()
        buffer: Last built buffer, None before the first refresh
        last_build_ms: Duration of the last rebuild

    Example:
        >>> engine = Tessellator.from_settings(TessellationSettings(width=64, height=64, seed=1))
        >>> engine.refresh()
        True
        >>> engine.handle_key("2")
        True
        >>> engine.refresh()
        True
        >>> engine.refresh()
        False
    """

    def __init__(
        self,
        sites: SiteSet,
        width: int,
        height: int,
        config: Optional[ActiveConfiguration] = None,
        method: str = "auto"
    ):
        if len(sites) == 0:
            raise ValueError("Site set cannot be empty")
        self.sites = sites
        self.width = width
        self.height = height
        self.config = config if config is not None else ActiveConfiguration()
        self.method = method
        self.buffer: Optional[TessellationBuffer] = None
        self.last_build_ms = 0.0
        self.build_count = 0

    @classmethod
    def from_settings(cls, settings: TessellationSettings) -> "Tessellator":
        """Generate sites for the settings and wrap them in an engine."""
        sites = generate_sites(
            count=settings.num_sites,
            x_range=settings.width,
            y_range=settings.height,
            seed=settings.seed
        )
        return cls(sites, settings.width, settings.height, method=settings.method)

    @property
    def dirty(self) -> bool:
        return self.config.dirty

    def set_metric(self, metric: DistanceMetric) -> None:
        self.config.set_metric(metric)

    def set_selector(self, selector: ExtremumSelector) -> None:
        self.config.set_selector(selector)

    def handle_key(self, key: Optional[str]) -> bool:
        """Route a key press to the configuration; True if it was bound."""
        return self.config.apply_key(key)

    def refresh(self) -> bool:
        """
        Rebuild the buffer if the configuration changed.

        The dirty flag is cleared only after rebuild() returns, so a
        failing build leaves it set.

        Returns:
            True if a rebuild happened
        """
        if not self.config.dirty:
            return False

        with Timer(verbose=False) as timer:
            buffer = rebuild(
                self.width,
                self.height,
                self.sites,
                self.config.metric,
                self.config.selector,
                method=self.method
            )

        self.buffer = buffer
        self.last_build_ms = timer.elapsed_ms
        self.build_count += 1
        self.config.mark_clean()
        return True
