"""
Generalized Voronoi Tessellation Renderer

This package colors every cell of a 2D grid by the site it selects under
a runtime-swappable distance metric (euclidean, manhattan, chebyshev,
minimal, octagonal approximation) and extremum rule (nearest or
farthest).

Main modules:
- data_models: Sites, site sets and tessellation buffers
- synthetic_sites: Random site generation
- geometry: Metrics, selectors, classifier and buffer builder
- config: Active configuration, key bindings and run settings
- engine: Dirty-flag driven rebuild loop
- viewer: matplotlib presentation shell
- hpc: Timing and benchmarking utilities
"""

__version__ = "1.0.0"
__author__ = "Course Project Team"
