"""
Benchmark orchestrator for sequence-container experiments.

Runs every operation category against a contiguous-storage sequence
(``list``) and a linked-node sequence (``collections.deque``), with a
warm-up pass before each measured pass, and wraps each pair of
measurements into an ``OperationResult``.
"""

import random
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, MutableSequence, Optional

from ..instrumentation.timing import timed
from ..instrumentation.traces import Tracer, get_tracer

DEFAULT_OPERATION_COUNT = 10000

# Elements appended before the random-position insert benchmark starts
RANDOM_INSERT_SEED_SIZE = 100


class Representation(Enum):
    """Container representations under comparison."""

    CONTIGUOUS = "list"
    LINKED = "deque"

    @property
    def label(self) -> str:
        return self.value

    def new_container(self) -> MutableSequence[int]:
        """Return a fresh, empty container of this representation."""
        if self is Representation.CONTIGUOUS:
            return []
        return deque()


class OperationCategory(Enum):
    """Benchmarked operation categories, in reporting order."""

    INSERT_AT_HEAD = "insert(head)"
    INSERT_AT_TAIL = "insert(tail)"
    INSERT_AT_RANDOM = "insert(random)"
    READ_SEQUENTIAL = "get(index)"
    READ_RANDOM = "get(random index)"
    REMOVE_FROM_HEAD = "remove(head)"
    REMOVE_FROM_TAIL = "remove(tail)"
    REMOVE_RANDOM = "remove(random)"
    SEARCH = "search(contains)"
    TRAVERSE = "iteration(for)"

    @property
    def label(self) -> str:
        return self.value


@dataclass
class BenchmarkConfig:
    """Configuration for a benchmark run."""

    operation_count: int = DEFAULT_OPERATION_COUNT
    warmup: bool = True
    seed: Optional[int] = None
    verbose: bool = False

    def validate(self) -> None:
        """Raise ValueError if the configuration cannot drive a run."""
        if isinstance(self.operation_count, bool) or not isinstance(self.operation_count, int):
            raise ValueError(
                f"operation_count must be an integer, got {self.operation_count!r}"
            )
        if self.operation_count < 0:
            raise ValueError(
                f"operation_count must be non-negative, got {self.operation_count}"
            )

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "operation_count": self.operation_count,
            "warmup": self.warmup,
            "seed": self.seed,
            "verbose": self.verbose,
        }


@dataclass(frozen=True)
class OperationResult:
    """Measured durations of one category on both representations.

    ``duration_a`` belongs to the contiguous representation and
    ``duration_b`` to the linked one, both in nanoseconds. Everything
    else is derived from the two durations on access.
    """

    operation_name: str
    operation_count: int
    duration_a: int
    duration_b: int
    category: Optional[OperationCategory] = field(default=None, compare=False)

    @property
    def faster_representation(self) -> Representation:
        """Representation with the smaller duration; ties go to A."""
        if self.duration_b < self.duration_a:
            return Representation.LINKED
        return Representation.CONTIGUOUS

    @property
    def faster_label(self) -> str:
        return self.faster_representation.label

    @property
    def ratio(self) -> float:
        """Slower duration over faster duration, 0.0 if either is zero."""
        if self.duration_a == 0 or self.duration_b == 0:
            return 0.0
        return max(self.duration_a, self.duration_b) / min(self.duration_a, self.duration_b)

    @property
    def absolute_difference(self) -> int:
        return abs(self.duration_a - self.duration_b)

    def duration_for(self, representation: Representation) -> int:
        """Measured duration for the given representation."""
        if representation is Representation.CONTIGUOUS:
            return self.duration_a
        return self.duration_b

    def to_dict(self) -> dict:
        """Convert result to dictionary for serialization."""
        return {
            "operation_name": self.operation_name,
            "operation_count": self.operation_count,
            "duration_a_ns": self.duration_a,
            "duration_b_ns": self.duration_b,
            "faster": self.faster_label,
            "ratio": self.ratio,
            "absolute_difference_ns": self.absolute_difference,
        }

    def __str__(self) -> str:
        return (
            f"{self.operation_name}: "
            f"{Representation.CONTIGUOUS.label}={self.duration_a} ns, "
            f"{Representation.LINKED.label}={self.duration_b} ns, "
            f"faster={self.faster_label} ({self.ratio:.2f}x)"
        )


# Timed procedure: mutates the container it is given, returns nanoseconds
Procedure = Callable[[MutableSequence[int]], int]


class BenchmarkRunner:
    """Times sequence operations on both container representations."""

    def __init__(
        self,
        operation_count: int = DEFAULT_OPERATION_COUNT,
        rng: Optional[random.Random] = None,
        tracer: Optional[Tracer] = None,
        verbose: bool = False,
        warmup: bool = True,
    ):
        self.config = BenchmarkConfig(
            operation_count=operation_count,
            warmup=warmup,
            verbose=verbose,
        )
        self.config.validate()
        self._operation_count = operation_count
        self.rng = rng if rng is not None else random.Random()
        self.tracer = tracer or get_tracer()

    @classmethod
    def from_config(
        cls,
        config: BenchmarkConfig,
        tracer: Optional[Tracer] = None,
    ) -> "BenchmarkRunner":
        """Build a runner from a BenchmarkConfig, seeding its random source."""
        config.validate()
        runner = cls(
            operation_count=config.operation_count,
            rng=random.Random(config.seed),
            tracer=tracer,
            verbose=config.verbose,
            warmup=config.warmup,
        )
        runner.config = config
        return runner

    @property
    def operation_count(self) -> int:
        return self._operation_count

    @property
    def verbose(self) -> bool:
        return self.config.verbose

    @property
    def warmup(self) -> bool:
        return self.config.warmup

    def span_attributes(self, category: OperationCategory) -> dict:
        """Span attributes for one category: the category plus the run config."""
        attributes = {"benchmark.category": category.label}
        for key, value in self.config.to_dict().items():
            # OpenTelemetry attributes cannot be None
            if value is not None:
                attributes[f"benchmark.{key}"] = value
        return attributes

    def _fill(self, seq: MutableSequence[int], count: int) -> None:
        for i in range(count):
            seq.append(i)

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------

    def insert_at_head(self, seq: MutableSequence[int]) -> int:
        """Insert N elements at position 0."""
        with timed(OperationCategory.INSERT_AT_HEAD.label) as timer:
            for i in range(self._operation_count):
                seq.insert(0, i)
        return timer.elapsed_ns

    def insert_at_tail(self, seq: MutableSequence[int]) -> int:
        """Append N elements."""
        with timed(OperationCategory.INSERT_AT_TAIL.label) as timer:
            for i in range(self._operation_count):
                seq.append(i)
        return timer.elapsed_ns

    def insert_at_random(self, seq: MutableSequence[int]) -> int:
        """Insert N elements at uniformly random positions.

        The container is seeded with up to a hundred elements first so
        that there is somewhere to insert into.
        """
        self._fill(seq, min(self._operation_count, RANDOM_INSERT_SEED_SIZE))
        with timed(OperationCategory.INSERT_AT_RANDOM.label) as timer:
            for i in range(self._operation_count):
                position = self.rng.randrange(len(seq)) if seq else 0
                seq.insert(position, i)
        return timer.elapsed_ns

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read_sequential(self, seq: MutableSequence[int]) -> int:
        """Read N elements by index, wrapping at the container size."""
        self._fill(seq, self._operation_count)
        with timed(OperationCategory.READ_SEQUENTIAL.label) as timer:
            for i in range(self._operation_count):
                seq[i % len(seq)]
        return timer.elapsed_ns

    def read_random(self, seq: MutableSequence[int]) -> int:
        """Read N elements at uniformly random indices."""
        self._fill(seq, self._operation_count)
        with timed(OperationCategory.READ_RANDOM.label) as timer:
            for _ in range(self._operation_count):
                seq[self.rng.randrange(len(seq))]
        return timer.elapsed_ns

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def remove_from_head(self, seq: MutableSequence[int]) -> int:
        """Remove the first element until the container is empty."""
        self._fill(seq, self._operation_count)
        with timed(OperationCategory.REMOVE_FROM_HEAD.label) as timer:
            while seq:
                del seq[0]
        return timer.elapsed_ns

    def remove_from_tail(self, seq: MutableSequence[int]) -> int:
        """Remove the last element until the container is empty."""
        self._fill(seq, self._operation_count)
        with timed(OperationCategory.REMOVE_FROM_TAIL.label) as timer:
            while seq:
                seq.pop()
        return timer.elapsed_ns

    def remove_random(self, seq: MutableSequence[int]) -> int:
        """Remove a uniformly random element until the container is empty."""
        self._fill(seq, self._operation_count)
        with timed(OperationCategory.REMOVE_RANDOM.label) as timer:
            while seq:
                del seq[self.rng.randrange(len(seq))]
        return timer.elapsed_ns

    # ------------------------------------------------------------------
    # Search and traversal
    # ------------------------------------------------------------------

    def search(self, seq: MutableSequence[int]) -> int:
        """Test membership of each of 0..N-1 by equality scan."""
        self._fill(seq, self._operation_count)
        with timed(OperationCategory.SEARCH.label) as timer:
            for i in range(self._operation_count):
                i in seq
        return timer.elapsed_ns

    def traverse(self, seq: MutableSequence[int]) -> int:
        """Iterate every element once."""
        self._fill(seq, self._operation_count)
        with timed(OperationCategory.TRAVERSE.label) as timer:
            for _ in seq:
                pass
        return timer.elapsed_ns

    # ------------------------------------------------------------------
    # Orchestration
    # ------------------------------------------------------------------

    def procedures(self) -> list[tuple[OperationCategory, Procedure]]:
        """Ordered dispatch table of category to timed procedure."""
        return [
            (OperationCategory.INSERT_AT_HEAD, self.insert_at_head),
            (OperationCategory.INSERT_AT_TAIL, self.insert_at_tail),
            (OperationCategory.INSERT_AT_RANDOM, self.insert_at_random),
            (OperationCategory.READ_SEQUENTIAL, self.read_sequential),
            (OperationCategory.READ_RANDOM, self.read_random),
            (OperationCategory.REMOVE_FROM_HEAD, self.remove_from_head),
            (OperationCategory.REMOVE_FROM_TAIL, self.remove_from_tail),
            (OperationCategory.REMOVE_RANDOM, self.remove_random),
            (OperationCategory.SEARCH, self.search),
            (OperationCategory.TRAVERSE, self.traverse),
        ]

    def procedure_for(self, category: OperationCategory) -> Procedure:
        """Look up the timed procedure for a category."""
        for candidate, procedure in self.procedures():
            if candidate is category:
                return procedure
        raise ValueError(f"Unknown operation category: {category}")

    def measure(self, category: OperationCategory, representation: Representation) -> int:
        """Run one category against a fresh container of one representation."""
        procedure = self.procedure_for(category)
        return procedure(representation.new_container())

    def run_category(self, category: OperationCategory) -> OperationResult:
        """Warm up, then measure both representations for one category."""
        attributes = self.span_attributes(category)

        with self.tracer.span(f"benchmark.{category.name.lower()}", attributes) as span:
            if self.verbose:
                print(f"  {category.label}...", end="", flush=True)

            if self.warmup:
                self.measure(category, Representation.CONTIGUOUS)
                self.measure(category, Representation.LINKED)

            duration_a = self.measure(category, Representation.CONTIGUOUS)
            duration_b = self.measure(category, Representation.LINKED)

            result = OperationResult(
                operation_name=category.label,
                operation_count=self._operation_count,
                duration_a=duration_a,
                duration_b=duration_b,
                category=category,
            )

            if span:
                span.set_attribute("benchmark.duration_a_ns", duration_a)
                span.set_attribute("benchmark.duration_b_ns", duration_b)
                span.set_attribute("benchmark.faster", result.faster_label)

            if self.verbose:
                print(
                    f" {Representation.CONTIGUOUS.label}={duration_a}ns"
                    f" {Representation.LINKED.label}={duration_b}ns"
                )

        return result

    def run_all(self) -> list[OperationResult]:
        """Run every category in reporting order."""
        if self.verbose:
            print(f"\nRunning sequence benchmarks ({self._operation_count} operations)")
            print(f"  Warm-up: {'on' if self.warmup else 'off'}")

        return [self.run_category(category) for category, _ in self.procedures()]
