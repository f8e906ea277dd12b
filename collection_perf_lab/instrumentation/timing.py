"""
Timing utilities for sequence-container benchmarking.

Provides a nanosecond timer and a context manager for wrapping
the measured section of a benchmark procedure.
"""

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class TimingResult:
    """Container for a single timing measurement."""

    name: str
    start_ns: int
    end_ns: int = 0
    metadata: dict = field(default_factory=dict)

    @property
    def elapsed_ns(self) -> int:
        """Elapsed time in nanoseconds."""
        return max(0, self.end_ns - self.start_ns)

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1_000_000

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "elapsed_ns": self.elapsed_ns,
            "metadata": self.metadata,
        }


class Timer:
    """Simple timer for manual timing control."""

    def __init__(self, name: str = "timer"):
        self.name = name
        self.start_ns: int = 0
        self.end_ns: int = 0
        self._running = False

    def start(self) -> "Timer":
        """Start the timer."""
        self.start_ns = time.perf_counter_ns()
        self.end_ns = 0
        self._running = True
        return self

    def stop(self) -> "Timer":
        """Stop the timer."""
        self.end_ns = time.perf_counter_ns()
        self._running = False
        return self

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed_ns(self) -> int:
        """Elapsed time in nanoseconds."""
        end = self.end_ns if not self._running else time.perf_counter_ns()
        return max(0, end - self.start_ns)

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds."""
        return self.elapsed_ns / 1_000_000

    def to_result(self, **metadata) -> TimingResult:
        """Convert to TimingResult with optional metadata."""
        return TimingResult(
            name=self.name,
            start_ns=self.start_ns,
            end_ns=self.end_ns if self.end_ns else time.perf_counter_ns(),
            metadata=metadata,
        )


@contextmanager
def timed(name: str = "operation") -> Iterator[Timer]:
    """Context manager for timing a block.

    Usage:
        with timed("insert_at_head") as timer:
            # do work
        print(f"Elapsed: {timer.elapsed_ns}ns")
    """
    timer = Timer(name).start()
    try:
        yield timer
    finally:
        timer.stop()
