"""
High-Performance Computing Module

Timing and benchmarking utilities used to measure tessellation rebuilds
and compare the scan and vectorized build methods.
"""

from .timing import (
    Timer,
    Benchmark,
    BenchmarkResult,
    compute_speedup
)

__all__ = [
    'Timer',
    'Benchmark',
    'BenchmarkResult',
    'compute_speedup'
]
