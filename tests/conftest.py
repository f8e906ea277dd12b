"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

import random

import pytest

from collection_perf_lab.harness.runner import BenchmarkRunner, OperationResult
from collection_perf_lab.instrumentation.traces import Tracer, TracingConfig

SMALL_OPERATION_COUNT = 100


@pytest.fixture
def seeded_rng() -> random.Random:
    """Return a deterministically seeded random source."""
    return random.Random(1234)


@pytest.fixture
def quiet_tracer() -> Tracer:
    """Return a tracer that was never initialized, so spans are no-ops."""
    return Tracer(TracingConfig(enable_console_export=False))


@pytest.fixture
def small_count() -> int:
    """Return the operation count used by the shared runner fixture."""
    return SMALL_OPERATION_COUNT


@pytest.fixture
def runner(seeded_rng: random.Random, quiet_tracer: Tracer, small_count: int) -> BenchmarkRunner:
    """Return a runner over a small operation count."""
    return BenchmarkRunner(
        operation_count=small_count,
        rng=seeded_rng,
        tracer=quiet_tracer,
    )


@pytest.fixture
def sample_results() -> list[OperationResult]:
    """Return a small hand-built result set: two list wins, one deque win."""
    return [
        OperationResult("insert(head)", 1000, 3000, 1000),
        OperationResult("get(index)", 1000, 1000, 3000),
        OperationResult("iteration(for)", 1000, 500, 500),
    ]
