"""
Presentation Shell for Tessellation Buffers

Draws a TessellationBuffer with matplotlib: the cell colors as an image
and the sites as points on top. Two entry points:

- render_image(): draw once, save to a file or show
- run_interactive(): open a window whose key presses switch the metric
  and selector; the buffer is rebuilt and redrawn only when dirty

matplotlib and scipy are imported inside the functions that need them.
"""

from typing import Optional
import numpy as np

from .config import METRIC_KEYS, SELECTOR_KEYS, describe_key_bindings
from .data_models import SiteSet, TessellationBuffer
from .engine import Tessellator
from .geometry.metrics import DistanceMetric
from .geometry.selectors import ExtremumSelector


def compute_voronoi_diagram(sites: SiteSet) -> Optional[object]:
    """
    Classic Euclidean Voronoi diagram of the sites.

    Only meaningful for the Euclidean metric with nearest-wins; used to
    outline the region boundaries on top of the rendered buffer.

    Returns:
        scipy.spatial.Voronoi object, or None if scipy is missing or
        there are fewer than 4 sites
    """
    try:
        from scipy.spatial import Voronoi
    except ImportError:
        print("scipy not available for Voronoi diagram computation")
        return None

    points = sites.get_points_array()
    if len(points) < 4:
        return None
    return Voronoi(points)


def _finite_ridges(vor) -> np.ndarray:
    segments = [vor.vertices[ridge] for ridge in vor.ridge_vertices if -1 not in ridge]
    return np.array(segments).reshape(-1, 2, 2)


def _title(metric: DistanceMetric, selector: ExtremumSelector) -> str:
    return f"{metric.value} / {selector.value}"


def _draw(ax, buffer: TessellationBuffer, sites: SiteSet):
    image = ax.imshow(
        buffer.to_image(),
        origin="upper",
        interpolation="nearest",
        extent=(-0.5, buffer.width - 0.5, buffer.height - 0.5, -0.5)
    )
    points = sites.get_points_array()
    ax.scatter(
        points[:, 0], points[:, 1],
        c=sites.get_colors_array(), s=24, edgecolors="black", linewidths=0.8, zorder=3
    )
    ax.set_xlim(-0.5, buffer.width - 0.5)
    ax.set_ylim(buffer.height - 0.5, -0.5)
    ax.set_aspect("equal")
    return image


def render_image(
    buffer: TessellationBuffer,
    sites: SiteSet,
    save_path: Optional[str] = None,
    title: Optional[str] = None,
    show_boundaries: bool = False
) -> None:
    """
    Render a buffer with its sites overlaid.

    Args:
        buffer: Built tessellation buffer
        sites: Sites to draw as points on top
        save_path: Save figure to this path; show it when None
        title: Optional figure title
        show_boundaries: Outline Euclidean Voronoi edges (scipy)
    """
    try:
        import matplotlib.pyplot as plt
        from matplotlib.collections import LineCollection
    except ImportError:
        print("matplotlib not available for visualization")
        return

    fig, ax = plt.subplots(figsize=(8, 8 * buffer.height / max(buffer.width, 1)))
    _draw(ax, buffer, sites)

    if show_boundaries:
        vor = compute_voronoi_diagram(sites)
        if vor is not None:
            ax.add_collection(LineCollection(
                _finite_ridges(vor), colors="white", linewidths=0.6, alpha=0.7
            ))

    if title:
        ax.set_title(title)
    ax.set_xticks([])
    ax.set_yticks([])
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
    else:
        plt.show()

    plt.close(fig)


def run_interactive(engine: Tessellator) -> None:
    """
    Open a window and let key presses drive the engine.

    Keys 1-5 select the metric, q/r the selector (see config.METRIC_KEYS
    and config.SELECTOR_KEYS). matplotlib's own bindings for those keys
    are removed for the lifetime of the window.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        print("matplotlib not available for visualization")
        return

    print(describe_key_bindings())

    engine.refresh()
    bound = set(METRIC_KEYS) | set(SELECTOR_KEYS)
    overrides = {}
    for name, keys in plt.rcParams.items():
        if name.startswith("keymap."):
            overrides[name] = [k for k in keys if k not in bound]

    with plt.rc_context(overrides):
        fig, ax = plt.subplots(figsize=(8, 8))
        image = _draw(ax, engine.buffer, engine.sites)
        ax.set_title(_title(engine.config.metric, engine.config.selector))

        def on_key(event):
            if not engine.handle_key(event.key):
                return
            if engine.refresh():
                image.set_data(engine.buffer.to_image())
                ax.set_title(_title(engine.config.metric, engine.config.selector))
                print(f"Rebuilt ({engine.config.describe()}) in {engine.last_build_ms:.1f} ms")
                fig.canvas.draw_idle()

        fig.canvas.mpl_connect("key_press_event", on_key)
        plt.show()
