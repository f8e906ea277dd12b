#!/usr/bin/env python3
"""
Collection Perf Lab - Main entry point for running benchmarks.

Usage:
    python main.py [operations] [options]

The optional positional argument is the number of operations per
benchmark. Values that are not a non-negative integer fall back to the
default (10000, or COLLECTION_PERF_OPERATIONS if set).
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from collection_perf_lab.harness.reporter import ChartReporter, ConsoleReporter
from collection_perf_lab.harness.runner import (
    DEFAULT_OPERATION_COUNT,
    BenchmarkConfig,
    BenchmarkRunner,
)
from collection_perf_lab.instrumentation.traces import (
    OTEL_AVAILABLE,
    TracingConfig,
    init_tracing,
    shutdown_tracing,
)


def default_operation_count() -> int:
    """Operation count from the environment, or the built-in default."""
    raw = os.getenv("COLLECTION_PERF_OPERATIONS")
    if raw is None:
        return DEFAULT_OPERATION_COUNT
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_OPERATION_COUNT
    return value if value >= 0 else DEFAULT_OPERATION_COUNT


def parse_operation_count(raw: Optional[str], default: int = DEFAULT_OPERATION_COUNT) -> int:
    """Parse the operation count, substituting the default for bad input."""
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        print(f"Invalid number format. Using default value: {default}")
        return default
    if value < 0:
        print(f"Operation count must be non-negative. Using default value: {default}")
        return default
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Collection Perf Lab - list vs deque sequence benchmarks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py
    python main.py 50000
    python main.py 1000 --seed 42 --chart results/charts
        """,
    )

    parser.add_argument(
        "operations",
        nargs="?",
        default=None,
        help=f"Number of operations per benchmark (default: {DEFAULT_OPERATION_COUNT})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random positions used by the random-access benchmarks",
    )
    parser.add_argument(
        "--no-warmup",
        action="store_true",
        help="Skip the warm-up pass before each measurement",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors in the report",
    )
    parser.add_argument(
        "--chart",
        type=Path,
        default=None,
        metavar="DIR",
        help="Write a comparison bar chart into this directory",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Export OpenTelemetry spans for each benchmark to the console",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print progress while benchmarks run",
    )
    return parser


def run(args: argparse.Namespace) -> None:
    """Run every benchmark and print the report."""
    operation_count = parse_operation_count(args.operations, default_operation_count())

    tracer = None
    if args.trace:
        if not OTEL_AVAILABLE:
            print("Warning: opentelemetry not installed, spans will not be exported")
        tracer = init_tracing(TracingConfig(enable_console_export=True))

    print("Running sequence benchmarks: list vs deque")
    print("=" * 58)

    config = BenchmarkConfig(
        operation_count=operation_count,
        warmup=not args.no_warmup,
        seed=args.seed,
        verbose=args.verbose,
    )
    runner = BenchmarkRunner.from_config(config, tracer=tracer)

    try:
        results = runner.run_all()
    finally:
        if tracer is not None:
            shutdown_tracing()

    reporter = ConsoleReporter(use_color=not args.no_color)
    print(reporter.full_report(results))

    if args.chart is not None:
        chart_path = ChartReporter(output_dir=args.chart).comparison_bar_chart(results)
        if chart_path:
            print(f"\nChart written to {chart_path}")


def main(argv: Optional[list[str]] = None) -> None:
    # Load environment variables from .env file
    load_dotenv()

    args = build_parser().parse_args(argv)

    try:
        run(args)
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
