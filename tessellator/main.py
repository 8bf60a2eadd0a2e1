"""
Main Entry Point for the Tessellation Renderer

This script provides a command-line interface for rendering generalized
Voronoi tessellations. It orchestrates:

1. Random site generation
2. Tessellation of the grid under a metric and extremum selector
3. Rendering to a window or an image file
4. Benchmarking of the build methods

Usage:
    # Interactive window (keys 1-5 switch metric, q/r switch selector)
    python -m tessellator.main --interactive

    # Render one configuration to a PNG
    python -m tessellator.main --metric manhattan --selector farthest --output out.png

    # Compare the scan and vectorized builders
    python -m tessellator.main --benchmark --sizes 32,64,128
"""

import argparse
import csv
import sys
from pathlib import Path
from typing import List

from .config import TessellationSettings, DEFAULT_WIDTH, DEFAULT_HEIGHT, DEFAULT_NUM_SITES
from .engine import Tessellator
from .geometry.metrics import DistanceMetric
from .geometry.selectors import ExtremumSelector
from .geometry.tessellation import rebuild, BUILD_METHODS
from .hpc.timing import Benchmark, Timer
from .synthetic_sites import generate_sites


def print_header():
    """Print application header."""
    print("=" * 70)
    print("  GENERALIZED VORONOI TESSELLATION")
    print("  Nearest / farthest site coloring under five distance metrics")
    print("=" * 70)
    print()


def build_engine(args) -> Tessellator:
    """
    Generate sites and create the engine from command line arguments.

    Args:
        args: Command line arguments

    Returns:
        Tessellator configured with the requested metric and selector
    """
    settings = TessellationSettings(
        width=args.width,
        height=args.height,
        num_sites=args.num_sites,
        seed=args.seed,
        method=args.method
    )

    if not args.quiet:
        print("Generating Sites...")
        print("-" * 40)
        print(f"  Grid: {settings.width} × {settings.height}")
        print(f"  Sites: {settings.num_sites}")
        print(f"  Random seed: {settings.seed}")
        print(f"  Build method: {settings.method}")
        print()

    engine = Tessellator.from_settings(settings)
    engine.set_metric(DistanceMetric.from_name(args.metric))
    engine.set_selector(ExtremumSelector.from_name(args.selector))
    return engine


def run_render(engine: Tessellator, args) -> int:
    """Build once and write the result to a file."""
    engine.refresh()

    if not args.quiet:
        print(f"Built tessellation ({engine.config.describe()}) "
              f"in {engine.last_build_ms:.2f} ms")
        print(engine.buffer.summary())
        print()

    if args.output:
        from .viewer import render_image

        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        render_image(
            engine.buffer,
            engine.sites,
            save_path=str(output_path),
            title=f"{engine.config.metric.value} / {engine.config.selector.value}",
            show_boundaries=args.boundaries
        )
        if not args.quiet:
            print(f"Image saved to: {output_path}")

    return 0


def parse_sizes(text: str) -> List[int]:
    """
    Parse a comma-separated list of grid side lengths.

    Raises:
        ValueError: If an entry is not an integer or is below 1
    """
    sizes = [int(s.strip()) for s in text.split(',')]
    if any(size < 1 for size in sizes):
        raise ValueError(f"Grid sizes must be at least 1, got {text}")
    return sizes


def run_benchmark(args) -> int:
    """Run performance benchmarks comparing the build methods."""
    sizes = parse_sizes(args.sizes)
    metric = DistanceMetric.from_name(args.metric)
    selector = ExtremumSelector.from_name(args.selector)

    if not args.quiet:
        print("Running Performance Benchmarks...")
        print("-" * 40)
        print(f"  Grid sizes: {sizes}")
        print(f"  Sites: {args.num_sites}")
        print(f"  Trials per size: {args.trials}")
        print()

    sites = generate_sites(args.num_sites, max(sizes), max(sizes), seed=args.seed)
    results = []

    for size in sizes:
        bench = Benchmark(f"Rebuild {size}x{size}")
        for method in ("scan", "vectorized"):
            bench.add_implementation(
                method,
                lambda m=method: rebuild(size, size, sites, metric, selector, method=m)
            )
        bench.run(n_trials=args.trials, warmup=0)
        if not args.quiet:
            bench.print_comparison(baseline="scan")

        speedups = bench.get_speedups("scan")
        results.append({
            'size': size,
            'cells': size * size,
            'scan_ms': bench.results["scan"].mean_ms,
            'vectorized_ms': bench.results["vectorized"].mean_ms,
            'speedup': speedups["vectorized"]
        })

    print("=" * 70)
    print("BENCHMARK SUMMARY")
    print("=" * 70)
    print(f"{'Size':>10} {'Scan(ms)':>12} {'Vector(ms)':>12} {'Speedup':>10}")
    print("-" * 70)
    for r in results:
        print(f"{r['size']:>10} {r['scan_ms']:>12.2f} "
              f"{r['vectorized_ms']:>12.2f} {r['speedup']:>10.2f}×")

    if args.save_benchmark:
        output_path = Path('benchmarks/benchmark_results.csv')
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=results[0].keys())
            writer.writeheader()
            writer.writerows(results)

        print(f"\nResults saved to: {output_path}")

    print()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Generalized Voronoi tessellation renderer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive window
  python -m tessellator.main --interactive

  # Render to file
  python -m tessellator.main --metric octagonal-approx --output out.png

  # Run benchmarks
  python -m tessellator.main --benchmark --sizes 32,64,128
        """
    )

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument('--interactive', '-I', action='store_true',
                            help='Open an interactive window')
    mode_group.add_argument('--benchmark', '-b', action='store_true',
                            help='Run performance benchmarks')

    grid_group = parser.add_argument_group('Grid')
    grid_group.add_argument('--width', type=int, default=DEFAULT_WIDTH,
                            help=f'Grid width in cells (default: {DEFAULT_WIDTH})')
    grid_group.add_argument('--height', type=int, default=DEFAULT_HEIGHT,
                            help=f'Grid height in cells (default: {DEFAULT_HEIGHT})')
    grid_group.add_argument('--num-sites', type=int, default=DEFAULT_NUM_SITES,
                            help=f'Number of random sites (default: {DEFAULT_NUM_SITES})')
    grid_group.add_argument('--seed', type=int, default=None,
                            help='Random seed (default: none)')

    proc_group = parser.add_argument_group('Processing')
    proc_group.add_argument('--metric', type=str, default='euclidean',
                            choices=[m.value for m in DistanceMetric],
                            help='Distance metric (default: euclidean)')
    proc_group.add_argument('--selector', type=str, default='nearest',
                            choices=[s.value for s in ExtremumSelector],
                            help='Extremum selector (default: nearest)')
    proc_group.add_argument('--method', type=str, default='auto',
                            choices=list(BUILD_METHODS),
                            help='Build method (default: auto)')

    bench_group = parser.add_argument_group('Benchmarking')
    bench_group.add_argument('--sizes', type=str, default='32,64,128',
                             help='Comma-separated grid sizes (default: 32,64,128)')
    bench_group.add_argument('--trials', type=int, default=3,
                             help='Number of timing trials (default: 3)')
    bench_group.add_argument('--save-benchmark', action='store_true',
                             help='Save benchmark results to CSV')

    out_group = parser.add_argument_group('Output')
    out_group.add_argument('--output', '-o', type=str, default=None,
                           help='Save the rendered tessellation to this image file '
                                '(not with --interactive)')
    out_group.add_argument('--boundaries', action='store_true',
                           help='Outline Euclidean Voronoi edges on the image '
                                '(not with --interactive)')
    out_group.add_argument('--quiet', '-q', action='store_true',
                           help='Minimal output')

    return parser


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.interactive and (args.output or args.boundaries):
        parser.error("--output and --boundaries cannot be used with --interactive")
    if args.benchmark:
        try:
            parse_sizes(args.sizes)
        except ValueError as e:
            parser.error(f"argument --sizes: {e}")

    if not args.quiet:
        print_header()

    if args.benchmark:
        return run_benchmark(args)

    with Timer("Site generation", verbose=not args.quiet):
        engine = build_engine(args)

    if args.interactive:
        from .viewer import run_interactive
        run_interactive(engine)
        return 0

    return run_render(engine, args)


if __name__ == "__main__":
    sys.exit(main())
