"""
Collection Perf Lab - microbenchmarks for sequence containers.

Compares the time cost of common sequence operations on a
contiguous-storage sequence (list) and a linked-node sequence (deque).

Key modules:
- instrumentation: Timing utilities and tracing integration
- harness: Benchmark orchestration and reporting
"""

__version__ = "0.1.0"

from . import instrumentation
from . import harness

__all__ = [
    "instrumentation",
    "harness",
]
