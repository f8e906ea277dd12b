"""
Benchmark harness for sequence-container experiments.

Provides orchestration and reporting capabilities.
"""

from .runner import (
    BenchmarkConfig,
    BenchmarkRunner,
    DEFAULT_OPERATION_COUNT,
    OperationCategory,
    OperationResult,
    Representation,
)

from .reporter import (
    ChartReporter,
    ConsoleReporter,
    WinSummary,
)

__all__ = [
    # Runner
    "BenchmarkConfig",
    "BenchmarkRunner",
    "DEFAULT_OPERATION_COUNT",
    "OperationCategory",
    "OperationResult",
    "Representation",
    # Reporter
    "ChartReporter",
    "ConsoleReporter",
    "WinSummary",
]
