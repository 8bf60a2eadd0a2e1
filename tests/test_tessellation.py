"""
Tests for the Tessellation Buffer Builder

This module tests full-grid rebuilds: buffer size and order,
determinism, agreement between the scan and vectorized methods, and
degenerate grids.

Test Categories:
1. Buffer shape and traversal order
2. Determinism
3. Scan vs vectorized consistency
4. Correctness against brute force (and scipy when available)
5. Edge cases

Run with: pytest tests/test_tessellation.py -v
"""

import pytest
import numpy as np

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tessellator.data_models import DEFAULT_COLOR, SiteSet, make_sites
from tessellator.geometry.classifier import classify
from tessellator.geometry.metrics import DistanceMetric
from tessellator.geometry.selectors import ExtremumSelector
from tessellator.geometry.tessellation import (
    rebuild,
    grid_positions,
    AUTO_VECTORIZE_CELLS
)
from tessellator.synthetic_sites import generate_sites


RED = (1.0, 0.0, 0.0, 1.0)
BLUE = (0.0, 0.0, 1.0, 1.0)

NEAREST = ExtremumSelector.NEAREST
FARTHEST = ExtremumSelector.FARTHEST

ALL_CONFIGS = [(m, s) for m in DistanceMetric for s in ExtremumSelector]


@pytest.fixture
def random_sites():
    return generate_sites(7, 24, 17, seed=3)


@pytest.fixture
def lattice_sites():
    """Sites on integer coordinates, which produce many exact ties."""
    return make_sites([
        ((2.0, 2.0), (0.1, 0.2, 0.3, 1.0)),
        ((8.0, 2.0), (0.4, 0.5, 0.6, 1.0)),
        ((2.0, 8.0), (0.7, 0.8, 0.9, 1.0)),
        ((8.0, 8.0), (0.9, 0.1, 0.5, 1.0)),
        ((5.0, 5.0), (0.3, 0.3, 0.3, 1.0)),
    ])


class TestBufferLayout:
    """Tests for buffer size and traversal order."""

    @pytest.mark.parametrize("width,height", [(1, 1), (5, 3), (3, 5), (16, 16)])
    def test_size(self, random_sites, width, height):
        buffer = rebuild(width, height, random_sites, DistanceMetric.EUCLIDEAN, NEAREST)
        assert len(buffer) == width * height
        assert buffer.colors.shape == (width * height, 4)
        assert buffer.owners.shape == (width * height,)

    def test_positions_are_grid_coordinates(self, random_sites):
        width, height = 6, 4
        buffer = rebuild(width, height, random_sites, DistanceMetric.MANHATTAN, NEAREST)
        for i, (x, y) in enumerate(buffer.positions):
            assert x == i // height
            assert y == i % height

    def test_iteration_yields_pairs(self, random_sites):
        buffer = rebuild(3, 2, random_sites, DistanceMetric.EUCLIDEAN, NEAREST)
        pairs = list(buffer)
        assert len(pairs) == 6
        assert pairs[0][0] == (0.0, 0.0)
        assert pairs[1][0] == (0.0, 1.0)
        assert pairs[2][0] == (1.0, 0.0)
        assert len(pairs[0][1]) == 4

    def test_grid_positions(self):
        positions = grid_positions(2, 3)
        assert positions.tolist() == [
            [0.0, 0.0], [0.0, 1.0], [0.0, 2.0],
            [1.0, 0.0], [1.0, 1.0], [1.0, 2.0]
        ]

    def test_colors_match_classifier(self, random_sites):
        width, height = 8, 5
        for metric, selector in ALL_CONFIGS:
            buffer = rebuild(width, height, random_sites, metric, selector)
            for (x, y), color in buffer:
                assert color == classify((x, y), random_sites, metric, selector)

    def test_to_image(self, random_sites):
        width, height = 7, 4
        buffer = rebuild(width, height, random_sites, DistanceMetric.CHEBYSHEV, FARTHEST)
        image = buffer.to_image()

        assert image.shape == (height, width, 4)
        for x in range(width):
            for y in range(height):
                assert np.array_equal(image[y, x], buffer.colors[x * height + y])
        assert np.array_equal(buffer.owner_grid()[2, 5], buffer.owners[5 * height + 2])

    def test_region_sizes_cover_grid(self, random_sites):
        buffer = rebuild(12, 9, random_sites, DistanceMetric.EUCLIDEAN, NEAREST)
        sizes = buffer.get_region_sizes()
        assert sum(sizes.values()) == 12 * 9
        assert all(0 <= idx < len(random_sites) for idx in sizes)
        assert "Cells:" in buffer.summary()


class TestDeterminism:
    """Identical inputs produce byte-identical buffers."""

    @pytest.mark.parametrize("method", ["scan", "vectorized"])
    def test_repeat_builds(self, random_sites, method):
        for metric, selector in ALL_CONFIGS:
            first = rebuild(10, 9, random_sites, metric, selector, method=method)
            second = rebuild(10, 9, random_sites, metric, selector, method=method)
            assert first.tobytes() == second.tobytes()

    def test_buffer_is_fully_replaced(self, random_sites):
        first = rebuild(6, 6, random_sites, DistanceMetric.EUCLIDEAN, NEAREST)
        second = rebuild(6, 6, random_sites, DistanceMetric.EUCLIDEAN, FARTHEST)
        assert first is not second
        assert first.colors is not second.colors


class TestMethodComparison:
    """Scan and vectorized builds agree exactly."""

    @pytest.mark.parametrize("metric,selector", ALL_CONFIGS)
    def test_random_sites(self, random_sites, metric, selector):
        scan = rebuild(24, 17, random_sites, metric, selector, method="scan")
        vectorized = rebuild(24, 17, random_sites, metric, selector, method="vectorized")
        assert scan.tobytes() == vectorized.tobytes()

    @pytest.mark.parametrize("metric,selector", ALL_CONFIGS)
    def test_lattice_sites_with_ties(self, lattice_sites, metric, selector):
        scan = rebuild(11, 11, lattice_sites, metric, selector, method="scan")
        vectorized = rebuild(11, 11, lattice_sites, metric, selector, method="vectorized")
        assert np.array_equal(scan.owners, vectorized.owners)
        assert scan.tobytes() == vectorized.tobytes()

    def test_auto_matches_scan(self, random_sites):
        for size in (8, int(np.sqrt(AUTO_VECTORIZE_CELLS)) + 1):
            auto = rebuild(size, size, random_sites, DistanceMetric.OCTAGONAL, NEAREST, method="auto")
            scan = rebuild(size, size, random_sites, DistanceMetric.OCTAGONAL, NEAREST, method="scan")
            assert auto.tobytes() == scan.tobytes()


class TestAgainstBruteForce:
    """Owners agree with first-occurrence argmin/argmax over a distance matrix."""

    @pytest.mark.parametrize("metric", list(DistanceMetric))
    def test_distance_matrix(self, lattice_sites, metric):
        width, height = 11, 11
        points = lattice_sites.get_points_array()
        positions = grid_positions(width, height)

        dist = metric.function(
            positions[:, np.newaxis, 0] - points[np.newaxis, :, 0],
            positions[:, np.newaxis, 1] - points[np.newaxis, :, 1]
        )

        nearest = rebuild(width, height, lattice_sites, metric, NEAREST, method="vectorized")
        farthest = rebuild(width, height, lattice_sites, metric, FARTHEST, method="vectorized")

        assert np.array_equal(nearest.owners, np.argmin(dist, axis=1))
        assert np.array_equal(farthest.owners, np.argmax(dist, axis=1))

    def test_euclidean_nearest_matches_scipy(self):
        """Euclidean nearest-wins is the classic Voronoi diagram."""
        spatial = pytest.importorskip("scipy.spatial")

        sites = generate_sites(30, 64, 48, seed=21)
        buffer = rebuild(64, 48, sites, DistanceMetric.EUCLIDEAN, NEAREST, method="vectorized")

        tree = spatial.cKDTree(sites.get_points_array())
        _, expected = tree.query(buffer.positions)

        assert np.array_equal(buffer.owners, expected)


class TestScenarios:
    """The red/blue scenario along a one-row grid."""

    def test_nearest_row(self):
        sites = make_sites([((0.0, 0.0), RED), ((10.0, 0.0), BLUE)])
        buffer = rebuild(11, 1, sites, DistanceMetric.EUCLIDEAN, NEAREST)
        assert list(buffer.owners) == [0] * 6 + [1] * 5

    def test_farthest_row(self):
        sites = make_sites([((0.0, 0.0), RED), ((10.0, 0.0), BLUE)])
        buffer = rebuild(11, 1, sites, DistanceMetric.EUCLIDEAN, FARTHEST)
        assert list(buffer.owners) == [1] * 5 + [0] * 6
        assert tuple(buffer.colors[3]) == BLUE
        assert tuple(buffer.colors[5]) == RED


class TestEdgeCases:
    """Tests for degenerate grids and site sets."""

    def test_empty_site_set(self):
        buffer = rebuild(4, 3, SiteSet(), DistanceMetric.EUCLIDEAN, NEAREST)
        assert len(buffer) == 12
        assert np.all(buffer.owners == -1)
        assert np.all(buffer.colors == np.array(DEFAULT_COLOR))
        assert buffer.get_region_sizes() == {}

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (0, 0)])
    def test_zero_dimension(self, random_sites, width, height):
        for method in ("scan", "vectorized"):
            buffer = rebuild(width, height, random_sites, DistanceMetric.EUCLIDEAN, NEAREST, method=method)
            assert len(buffer) == 0

    def test_negative_dimension(self, random_sites):
        with pytest.raises(ValueError):
            rebuild(-1, 5, random_sites, DistanceMetric.EUCLIDEAN, NEAREST)

    def test_unknown_method(self, random_sites):
        with pytest.raises(ValueError):
            rebuild(4, 4, random_sites, DistanceMetric.EUCLIDEAN, NEAREST, method="kdtree")

    def test_single_site_owns_everything(self):
        sites = make_sites([((3.0, 3.0), RED)])
        for metric, selector in ALL_CONFIGS:
            buffer = rebuild(5, 5, sites, metric, selector, method="vectorized")
            assert np.all(buffer.owners == 0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
