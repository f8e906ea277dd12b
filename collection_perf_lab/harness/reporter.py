"""
Results aggregation and visualization for benchmark results.

Provides CLI tables, win summaries, and comparison charts.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .runner import OperationResult, Representation


@dataclass
class WinSummary:
    """Per-representation win counts over a set of results."""

    contiguous_wins: int = 0
    linked_wins: int = 0

    @classmethod
    def from_results(cls, results: list[OperationResult]) -> "WinSummary":
        summary = cls()
        for result in results:
            if result.faster_representation is Representation.CONTIGUOUS:
                summary.contiguous_wins += 1
            else:
                summary.linked_wins += 1
        return summary

    def wins_for(self, representation: Representation) -> int:
        if representation is Representation.CONTIGUOUS:
            return self.contiguous_wins
        return self.linked_wins

    @property
    def leader(self) -> Optional[Representation]:
        """Representation with more wins, or None when even."""
        if self.contiguous_wins > self.linked_wins:
            return Representation.CONTIGUOUS
        if self.linked_wins > self.contiguous_wins:
            return Representation.LINKED
        return None


RECOMMENDATIONS = [
    f"{Representation.CONTIGUOUS.label} is better for frequent index access and appends at the end",
    f"{Representation.LINKED.label} is better for frequent inserts/removals at the head",
    "both pay O(n) to insert or remove in the middle",
]


class ConsoleReporter:
    """Generates console/CLI reports."""

    def __init__(self, use_color: bool = True):
        self.use_color = use_color

    def _color(self, text: str, color: str) -> str:
        """Apply ANSI color if enabled."""
        if not self.use_color:
            return text

        colors = {
            "green": "\033[92m",
            "red": "\033[91m",
            "yellow": "\033[93m",
            "blue": "\033[94m",
            "bold": "\033[1m",
            "reset": "\033[0m",
        }

        return f"{colors.get(color, '')}{text}{colors['reset']}"

    def format_duration(self, ns: int) -> str:
        """Format a nanosecond duration for display."""
        if ns < 1_000:
            return f"{ns}ns"
        if ns < 1_000_000:
            return f"{ns / 1_000:.1f}µs"
        if ns < 1_000_000_000:
            return f"{ns / 1_000_000:.1f}ms"
        return f"{ns / 1_000_000_000:.2f}s"

    def format_ratio(self, ratio: float) -> str:
        return f"{ratio:.2f}x"

    def results_table(self, results: list[OperationResult]) -> str:
        """Generate the per-operation comparison table."""
        if not results:
            return "No results to display"

        a_label = Representation.CONTIGUOUS.label
        b_label = Representation.LINKED.label
        headers = ["Operation", f"{a_label} (ns)", f"{b_label} (ns)", "Faster", "Ratio"]
        col_widths = [25, 15, 15, 12, 10]

        lines = []
        lines.append(self._color(
            f"\nResults ({results[0].operation_count} operations):", "bold"
        ))
        lines.append(self._color(f"{'=' * sum(col_widths)}", "blue"))

        # Header row
        header_row = ""
        for i, header in enumerate(headers):
            header_row += f"{header:<{col_widths[i]}}"
        lines.append(self._color(header_row, "bold"))
        lines.append("-" * sum(col_widths))

        # Data rows
        for result in results:
            row = []

            name = result.operation_name
            if len(name) > col_widths[0] - 1:
                name = name[:col_widths[0] - 4] + "..."
            row.append(f"{name:<{col_widths[0]}}")

            row.append(f"{result.duration_a:<{col_widths[1]}}")
            row.append(f"{result.duration_b:<{col_widths[2]}}")

            faster = f"{result.faster_label:<{col_widths[3]}}"
            color = "green" if result.faster_representation is Representation.CONTIGUOUS else "yellow"
            row.append(self._color(faster, color))

            row.append(self.format_ratio(result.ratio))

            lines.append("".join(row))

        return "\n".join(lines)

    def summary(self, results: list[OperationResult]) -> str:
        """Generate the win-count summary."""
        wins = WinSummary.from_results(results)

        lines = []
        lines.append(self._color("\nSummary:", "bold"))
        lines.append(self._color("=" * 20, "blue"))
        for representation in Representation:
            lines.append(f"{representation.label} wins: {wins.wins_for(representation)}")

        leader = wins.leader
        if leader is None:
            lines.append("Performance is roughly even")
        else:
            lines.append(self._color(
                f"{leader.label} was faster in most operations", "green"
            ))

        return "\n".join(lines)

    def recommendations(self) -> str:
        lines = [self._color("\nRecommendations:", "bold")]
        for hint in RECOMMENDATIONS:
            lines.append(f"- {hint}")
        return "\n".join(lines)

    def full_report(self, results: list[OperationResult]) -> str:
        """Table, summary and recommendations in one string."""
        if not results:
            return self.results_table(results)
        return "\n".join([
            self.results_table(results),
            self.summary(results),
            self.recommendations(),
        ])


class ChartReporter:
    """Generates visual charts using matplotlib."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or Path("results/charts")
        self._matplotlib_available = False
        self._check_matplotlib()

    def _check_matplotlib(self):
        """Check if matplotlib is available."""
        try:
            import matplotlib
            matplotlib.use("Agg")  # Non-interactive backend
            self._matplotlib_available = True
        except ImportError:
            self._matplotlib_available = False

    def comparison_bar_chart(
        self,
        results: list[OperationResult],
        filename: Optional[str] = None,
    ) -> Optional[Path]:
        """Generate a grouped bar chart of both representations per operation."""
        if not self._matplotlib_available:
            print("Warning: matplotlib not available for charts")
            return None

        import matplotlib.pyplot as plt
        import numpy as np

        if not results:
            return None

        names = [r.operation_name for r in results]
        # Log scale cannot show zero-length bars
        durations_a = [max(r.duration_a, 1) for r in results]
        durations_b = [max(r.duration_b, 1) for r in results]

        x = np.arange(len(names))
        width = 0.35

        fig, ax = plt.subplots(figsize=(12, 6))
        ax.bar(x - width / 2, durations_a, width,
               label=Representation.CONTIGUOUS.label, color="steelblue")
        ax.bar(x + width / 2, durations_b, width,
               label=Representation.LINKED.label, color="coral")

        ax.set_yscale("log")
        ax.set_xlabel("Operation")
        ax.set_ylabel("Duration (ns)")
        ax.set_title(f"Sequence Operations ({results[0].operation_count} operations)")
        ax.set_xticks(x)
        ax.set_xticklabels(names, rotation=45, ha="right")
        ax.legend()

        fig.tight_layout()

        self.output_dir.mkdir(parents=True, exist_ok=True)
        filename = filename or "comparison_bar_chart.png"
        filepath = self.output_dir / filename
        fig.savefig(filepath, dpi=150, bbox_inches="tight")
        plt.close(fig)

        return filepath
