"""Unit tests for BenchmarkRunner."""

import random
from collections import deque

import pytest

from collection_perf_lab.harness.runner import (
    DEFAULT_OPERATION_COUNT,
    BenchmarkConfig,
    BenchmarkRunner,
    OperationCategory,
    Representation,
)

EXPECTED_ORDER = [
    "insert(head)",
    "insert(tail)",
    "insert(random)",
    "get(index)",
    "get(random index)",
    "remove(head)",
    "remove(tail)",
    "remove(random)",
    "search(contains)",
    "iteration(for)",
]


def both_containers():
    return [[], deque()]


class TestConstruction:
    """Test runner construction and configuration."""

    def test_operation_count(self, runner, small_count):
        assert runner.operation_count == small_count

    def test_default_operation_count(self, quiet_tracer):
        assert BenchmarkRunner(tracer=quiet_tracer).operation_count == DEFAULT_OPERATION_COUNT

    def test_negative_count_rejected(self):
        """Negative operation counts fail at construction."""
        with pytest.raises(ValueError, match="non-negative"):
            BenchmarkRunner(operation_count=-1)

    def test_non_integer_count_rejected(self):
        with pytest.raises(ValueError, match="integer"):
            BenchmarkRunner(operation_count="100")

    def test_zero_count_allowed(self, quiet_tracer):
        assert BenchmarkRunner(operation_count=0, tracer=quiet_tracer).operation_count == 0

    def test_from_config(self, quiet_tracer):
        config = BenchmarkConfig(operation_count=7, warmup=False, seed=3)
        runner = BenchmarkRunner.from_config(config, tracer=quiet_tracer)
        assert runner.operation_count == 7
        assert runner.warmup is False
        assert runner.rng.random() == random.Random(3).random()

    def test_config_validate_negative(self):
        with pytest.raises(ValueError):
            BenchmarkConfig(operation_count=-5).validate()

    def test_config_to_dict(self):
        assert BenchmarkConfig(operation_count=5, seed=1).to_dict() == {
            "operation_count": 5,
            "warmup": True,
            "seed": 1,
            "verbose": False,
        }


class TestRepresentation:
    """Test container factories."""

    def test_new_containers_are_fresh(self):
        for representation in Representation:
            first = representation.new_container()
            second = representation.new_container()
            assert len(first) == 0
            assert first is not second

    def test_container_types(self):
        assert isinstance(Representation.CONTIGUOUS.new_container(), list)
        assert isinstance(Representation.LINKED.new_container(), deque)


class TestInsertion:
    """Test the insertion procedures."""

    @pytest.mark.parametrize("seq", both_containers())
    def test_insert_at_tail(self, runner, seq):
        """Appending N elements leaves 0..N-1 in order."""
        elapsed = runner.insert_at_tail(seq)
        assert elapsed >= 0
        assert len(seq) == runner.operation_count
        for i in range(runner.operation_count):
            assert seq[i] == i

    @pytest.mark.parametrize("seq", both_containers())
    def test_insert_at_head(self, runner, seq):
        """Inserting at position 0 leaves elements in reverse order."""
        elapsed = runner.insert_at_head(seq)
        assert elapsed >= 0
        assert list(seq) == list(reversed(range(runner.operation_count)))

    @pytest.mark.parametrize("seq", both_containers())
    def test_insert_at_random(self, runner, seq):
        """Random inserts add N elements on top of the seeded hundred."""
        elapsed = runner.insert_at_random(seq)
        assert elapsed >= 0
        assert len(seq) == runner.operation_count + min(runner.operation_count, 100)

    def test_insert_at_random_seed_size_capped(self, quiet_tracer):
        runner = BenchmarkRunner(operation_count=250, rng=random.Random(0), tracer=quiet_tracer)
        seq = []
        runner.insert_at_random(seq)
        assert len(seq) == 350

    def test_insert_at_random_small_count(self, quiet_tracer):
        runner = BenchmarkRunner(operation_count=5, rng=random.Random(0), tracer=quiet_tracer)
        seq = deque()
        runner.insert_at_random(seq)
        assert len(seq) == 10

    def test_insert_at_random_reproducible(self, quiet_tracer):
        """The same seed produces the same insert positions."""
        first = BenchmarkRunner(operation_count=50, rng=random.Random(9), tracer=quiet_tracer)
        second = BenchmarkRunner(operation_count=50, rng=random.Random(9), tracer=quiet_tracer)
        a, b = [], deque()
        first.insert_at_random(a)
        second.insert_at_random(b)
        assert a == list(b)


class TestReads:
    """Test the read procedures."""

    @pytest.mark.parametrize("seq", both_containers())
    def test_read_sequential(self, runner, seq):
        """Reads do not change the pre-populated container."""
        assert runner.read_sequential(seq) >= 0
        assert list(seq) == list(range(runner.operation_count))

    @pytest.mark.parametrize("seq", both_containers())
    def test_read_random(self, runner, seq):
        assert runner.read_random(seq) >= 0
        assert len(seq) == runner.operation_count


class TestRemoval:
    """Test the removal procedures."""

    @pytest.mark.parametrize("seq", both_containers())
    def test_remove_from_head(self, runner, seq):
        assert runner.remove_from_head(seq) >= 0
        assert len(seq) == 0

    @pytest.mark.parametrize("seq", both_containers())
    def test_remove_from_tail(self, runner, seq):
        assert runner.remove_from_tail(seq) >= 0
        assert len(seq) == 0

    @pytest.mark.parametrize("seq", both_containers())
    def test_remove_random(self, runner, seq):
        assert runner.remove_random(seq) >= 0
        assert len(seq) == 0


class TestSearchAndTraversal:
    """Test membership search and traversal."""

    @pytest.mark.parametrize("seq", both_containers())
    def test_search(self, runner, seq):
        assert runner.search(seq) >= 0
        assert len(seq) == runner.operation_count

    @pytest.mark.parametrize("seq", both_containers())
    def test_traverse(self, runner, seq):
        assert runner.traverse(seq) >= 0
        assert len(seq) == runner.operation_count


class TestZeroOperations:
    """Test procedures with an operation count of zero."""

    @pytest.fixture
    def empty_runner(self, quiet_tracer):
        return BenchmarkRunner(operation_count=0, rng=random.Random(0), tracer=quiet_tracer)

    @pytest.mark.parametrize("category", list(OperationCategory))
    def test_every_procedure_leaves_container_empty(self, empty_runner, category):
        seq = []
        assert empty_runner.procedure_for(category)(seq) >= 0
        assert seq == []

    def test_run_all(self, empty_runner):
        results = empty_runner.run_all()
        assert len(results) == 10
        assert all(r.operation_count == 0 for r in results)


class RecordingRunner(BenchmarkRunner):
    """Runner that records each container handed to insert_at_tail."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.seen = []

    def insert_at_tail(self, seq):
        self.seen.append((seq, len(seq)))
        return super().insert_at_tail(seq)


class TestRunCategory:
    """Test the warm-up then measure protocol."""

    def test_warmup_uses_fresh_containers(self, quiet_tracer):
        """Warm-up and measurement each get their own empty container."""
        runner = RecordingRunner(operation_count=10, tracer=quiet_tracer)
        runner.run_category(OperationCategory.INSERT_AT_TAIL)

        assert len(runner.seen) == 4
        containers = [seq for seq, _ in runner.seen]
        assert all(size == 0 for _, size in runner.seen)
        assert len({id(seq) for seq in containers}) == 4
        assert [type(seq) for seq in containers] == [list, deque, list, deque]

    def test_no_warmup_measures_once_each(self, quiet_tracer):
        runner = RecordingRunner(operation_count=10, tracer=quiet_tracer, warmup=False)
        runner.run_category(OperationCategory.INSERT_AT_TAIL)
        assert [type(seq) for seq, _ in runner.seen] == [list, deque]

    def test_result_carries_operation_count(self, runner, small_count):
        result = runner.run_category(OperationCategory.SEARCH)
        assert result.operation_name == "search(contains)"
        assert result.operation_count == small_count
        assert result.category is OperationCategory.SEARCH
        assert result.duration_a >= 0
        assert result.duration_b >= 0

    def test_measure_uses_fresh_container(self, runner):
        assert runner.measure(OperationCategory.REMOVE_RANDOM, Representation.LINKED) >= 0


class TestRunAll:
    """Test the composite run over every category."""

    def test_ten_results_in_order(self, runner):
        results = runner.run_all()
        assert len(results) == 10
        assert [r.operation_name for r in results] == EXPECTED_ORDER
        assert [r.category for r in results] == list(OperationCategory)

    def test_operation_count_on_every_result(self, runner, small_count):
        for result in runner.run_all():
            assert result.operation_count == small_count

    def test_repeat_runs_have_same_shape(self, runner):
        """Two runs line up by name and count; durations may differ."""
        first = runner.run_all()
        second = runner.run_all()
        assert first is not second
        assert len(first) == len(second)
        for a, b in zip(first, second):
            assert a.operation_name == b.operation_name
            assert a.operation_count == b.operation_count

    def test_dispatch_table_covers_every_category(self, runner):
        categories = [category for category, _ in runner.procedures()]
        assert categories == list(OperationCategory)

    def test_verbose_prints_progress(self, quiet_tracer, capsys):
        runner = BenchmarkRunner(operation_count=5, tracer=quiet_tracer, verbose=True)
        runner.run_all()
        out = capsys.readouterr().out
        assert "Running sequence benchmarks (5 operations)" in out
        for name in EXPECTED_ORDER:
            assert name in out

    def test_quiet_by_default(self, runner, capsys):
        runner.run_all()
        assert capsys.readouterr().out == ""


class TestRunConfig:
    """Test that the runner config drives behavior and span attributes."""

    def test_from_config_keeps_config(self, quiet_tracer):
        config = BenchmarkConfig(operation_count=4, warmup=False, seed=11, verbose=False)
        runner = BenchmarkRunner.from_config(config, tracer=quiet_tracer)
        assert runner.config is config
        assert runner.warmup is False
        assert runner.verbose is False

    def test_span_attributes_follow_config(self, quiet_tracer):
        config = BenchmarkConfig(operation_count=4, seed=11)
        runner = BenchmarkRunner.from_config(config, tracer=quiet_tracer)
        assert runner.span_attributes(OperationCategory.SEARCH) == {
            "benchmark.category": "search(contains)",
            "benchmark.operation_count": 4,
            "benchmark.warmup": True,
            "benchmark.seed": 11,
            "benchmark.verbose": False,
        }

    def test_span_attributes_skip_missing_seed(self, runner):
        attributes = runner.span_attributes(OperationCategory.TRAVERSE)
        assert "benchmark.seed" not in attributes
        assert attributes["benchmark.operation_count"] == runner.operation_count


class TestRunCategoryTracing:
    """Test the span emitted around each category."""

    @pytest.fixture
    def exported(self):
        pytest.importorskip("opentelemetry.sdk")
        from opentelemetry.sdk.trace.export import SimpleSpanProcessor
        from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
            InMemorySpanExporter,
        )

        from collection_perf_lab.instrumentation.traces import Tracer, TracingConfig

        tracer = Tracer(TracingConfig(enable_console_export=False)).initialize()
        exporter = InMemorySpanExporter()
        tracer._provider.add_span_processor(SimpleSpanProcessor(exporter))
        try:
            yield tracer, exporter
        finally:
            tracer.shutdown()

    def test_span_carries_durations(self, exported):
        tracer, exporter = exported
        runner = BenchmarkRunner.from_config(
            BenchmarkConfig(operation_count=20, seed=5), tracer=tracer
        )
        result = runner.run_category(OperationCategory.REMOVE_RANDOM)

        spans = exporter.get_finished_spans()
        assert [span.name for span in spans] == ["benchmark.remove_random"]
        attributes = dict(spans[0].attributes)
        assert attributes["benchmark.category"] == "remove(random)"
        assert attributes["benchmark.operation_count"] == 20
        assert attributes["benchmark.seed"] == 5
        assert attributes["benchmark.duration_a_ns"] == result.duration_a
        assert attributes["benchmark.duration_b_ns"] == result.duration_b
        assert attributes["benchmark.faster"] == result.faster_label

    def test_one_span_per_category(self, exported):
        tracer, exporter = exported
        runner = BenchmarkRunner(operation_count=3, tracer=tracer)
        runner.run_all()
        names = [span.name for span in exporter.get_finished_spans()]
        assert names == [f"benchmark.{category.name.lower()}" for category in OperationCategory]
