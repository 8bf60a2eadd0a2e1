"""
Timing and Benchmarking Utilities

Measures how long a tessellation rebuild takes and compares build
methods against each other.

Features:
- Timer context manager for easy timing
- Speedup calculation
- BenchmarkResult container with trial statistics
- Benchmark runner for comparing build methods

Example:
    >>> with Timer("Rebuild 256x256") as t:
    ...     buffer = rebuild(256, 256, sites, metric, selector, method="vectorized")
    Rebuild 256x256: 41.87 ms
"""

import time
from dataclasses import dataclass, field
from typing import Optional, Callable, Any, List, Dict
import statistics


class Timer:
    """
    Context manager for timing code blocks.

    Provides high-resolution timing using time.perf_counter().

    Attributes:
        name: Optional name for the timed operation
        elapsed: Elapsed time in seconds
        elapsed_ms: Elapsed time in milliseconds
    """

    def __init__(self, name: Optional[str] = None, verbose: bool = True):
        """
        Initialize timer.

        Args:
            name: Optional name to print with timing
            verbose: Whether to print timing on exit
        """
        self.name = name
        self.verbose = verbose
        self._start: float = 0
        self.elapsed: float = 0

    def __enter__(self) -> 'Timer':
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        self.elapsed = time.perf_counter() - self._start

        if self.verbose and self.name:
            print(f"{self.name}: {self.elapsed_ms:.2f} ms")

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds."""
        return self.elapsed * 1000


def compute_speedup(baseline_time: float, optimized_time: float) -> float:
    """
    Speedup = baseline_time / optimized_time

    A speedup > 1 means the optimized version is faster.

    Example:
        >>> compute_speedup(100.0, 25.0)
        4.0
    """
    if optimized_time <= 0:
        return float('inf')
    return baseline_time / optimized_time


@dataclass
class BenchmarkResult:
    """
    Container for benchmark results.

    Attributes:
        name: Name of the benchmarked operation
        times_ms: List of timing results in milliseconds
        metadata: Optional additional information (grid size, metric, ...)
    """
    name: str
    times_ms: List[float] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_trial(self, time_ms: float) -> None:
        self.times_ms.append(time_ms)

    @property
    def mean_ms(self) -> float:
        if not self.times_ms:
            return 0.0
        return statistics.mean(self.times_ms)

    @property
    def std_ms(self) -> float:
        if len(self.times_ms) < 2:
            return 0.0
        return statistics.stdev(self.times_ms)

    @property
    def num_trials(self) -> int:
        return len(self.times_ms)


class Benchmark:
    """
    Benchmark runner for comparing multiple implementations.

    Example:
        >>> bench = Benchmark("Rebuild 128x128")
        >>> bench.add_implementation("scan", lambda: rebuild(..., method="scan"))
        >>> bench.add_implementation("vectorized", lambda: rebuild(..., method="vectorized"))
        >>> bench.run(n_trials=3)
        >>> bench.print_comparison(baseline="scan")
    """

    def __init__(self, name: str):
        self.name = name
        self.implementations: Dict[str, Callable] = {}
        self.results: Dict[str, BenchmarkResult] = {}

    def add_implementation(self, name: str, func: Callable) -> None:
        self.implementations[name] = func
        self.results[name] = BenchmarkResult(name)

    def run(
        self,
        *args,
        n_trials: int = 5,
        warmup: int = 1,
        **kwargs
    ) -> Dict[str, BenchmarkResult]:
        """
        Run the benchmark on all implementations.

        Args:
            *args: Arguments to pass to implementations
            n_trials: Number of timing trials
            warmup: Number of warmup runs (not timed)
            **kwargs: Keyword arguments to pass to implementations

        Returns:
            Dictionary mapping implementation names to results
        """
        for impl_name, func in self.implementations.items():
            for _ in range(warmup):
                _ = func(*args, **kwargs)

            result = self.results[impl_name]
            for _ in range(n_trials):
                with Timer(verbose=False) as t:
                    _ = func(*args, **kwargs)
                result.add_trial(t.elapsed_ms)

        return self.results

    def get_speedups(self, baseline: str) -> Dict[str, float]:
        """Speedup of every implementation relative to ``baseline``."""
        baseline_time = self.results[baseline].mean_ms
        return {
            name: compute_speedup(baseline_time, result.mean_ms)
            for name, result in self.results.items()
        }

    def print_comparison(self, baseline: Optional[str] = None) -> None:
        """Print comparison table of results."""
        print(f"\nBenchmark: {self.name}")
        print("=" * 60)

        if baseline is None:
            baseline = list(self.results.keys())[0]
        speedups = self.get_speedups(baseline)

        print(f"{'Implementation':<20} {'Mean (ms)':>12} {'Std (ms)':>10} {'Speedup':>10}")
        print("-" * 60)

        for name, result in self.results.items():
            speedup_str = f"{speedups[name]:.2f}x" if name != baseline else "(baseline)"
            print(f"{name:<20} {result.mean_ms:>12.2f} {result.std_ms:>10.2f} {speedup_str:>10}")

        print()
