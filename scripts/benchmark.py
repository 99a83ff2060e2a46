#!/usr/bin/env python3
"""
Gawk Performance Benchmarks
===========================

Measures the hot paths of the node graph and prints the results with rich:

- Node creation: wrapping a small nested record, N times
- Deep merge notifications: merge_deep into a watched tree, N times, checking
  that the watcher fires exactly once per merge
- Leaf updates: writing N leaves of one record, one notification each
- Splice: replacing every element of an N-element list in one call
- Memory: traced allocation while building N nested records

Usage:
    python scripts/benchmark.py             # Run all benchmarks
    python scripts/benchmark.py --n 50000   # Fixed workload for the merge/memory runs
    python scripts/benchmark.py --config    # Show current benchmark configuration
"""

import argparse
import random
import time
import tracemalloc
from dataclasses import dataclass
from typing import Any, Callable, Dict

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

import gawk

# Configuration constants - adjust these to change benchmark behavior
TIME_LIMIT_SECONDS = 1.0  # Stop scaling once one run takes this long
STARTING_N = 10
SCALE_FACTOR = 1.5
DEFAULT_FIXED_N = 100000


@dataclass
class MemoryMetrics:
    """Traced memory for one workload."""

    nodes: int
    current_kb: int
    peak_kb: int

    @property
    def bytes_per_record(self) -> float:
        return (self.current_kb * 1024) / self.nodes if self.nodes else 0.0


def _nested_record() -> Dict[str, Any]:
    return {"foo": {"bar": {}}}


def _run_adaptive(operation: Callable[[int], int]) -> Dict[str, Any]:
    """Scale the workload until one run exceeds the time limit."""
    n = STARTING_N
    while True:
        start = time.perf_counter()
        performed = operation(n)
        elapsed = time.perf_counter() - start

        result = {
            "max_n": n,
            "operation_time": elapsed,
            "operations_per_second": performed / elapsed if elapsed > 0 else float("inf"),
        }
        if elapsed >= TIME_LIMIT_SECONDS:
            return result
        n = max(n + 1, int(n * SCALE_FACTOR))


class GawkBenchmark:
    """Rich-formatted benchmark runner."""

    def __init__(self, fixed_n: int, quiet: bool = False):
        self.console = Console()
        self.fixed_n = fixed_n
        self.quiet = quiet
        self.results: Dict[str, Dict[str, Any]] = {}
        self.memory: MemoryMetrics = MemoryMetrics(0, 0, 0)

    def run(self) -> bool:
        started = time.time()
        self.console.print(
            Panel(Align.center("Gawk Performance Benchmark Suite"), border_style="blue")
        )

        self._bench("creation", "Node Creation", self._creation)
        self._bench("updates", "Leaf Updates", self._updates)
        self._bench("splice", "List Splice", self._splice)
        merge_ok = self._merge_notifications()
        self.memory = self._profile_memory()

        self._display_results(time.time() - started, merge_ok)
        return merge_ok

    def _bench(self, key: str, name: str, operation: Callable[[int], int]) -> None:
        if not self.quiet:
            self.console.print(f"[yellow]Running {name}...[/yellow]")
        result = _run_adaptive(operation)
        self.results[key] = result
        if not self.quiet:
            self.console.print(
                f"[green]✓[/green] {name}: {result['operations_per_second']:,.0f} ops/sec "
                f"({result['max_n']} items)"
            )

    @staticmethod
    def _creation(n: int) -> int:
        for _ in range(n):
            gawk.wrap(_nested_record())
        return n

    @staticmethod
    def _updates(n: int) -> int:
        doc = gawk.wrap({f"k{i}": 0 for i in range(n)})
        fired = []
        doc.watch(lambda node, source: fired.append(source))
        for i, leaf in enumerate(doc.values()):
            leaf.val = i + 1
        assert len(fired) == n
        return n

    @staticmethod
    def _splice(n: int) -> int:
        items = gawk.wrap(list(range(n)))
        fired = []
        items.watch(lambda node, source: fired.append(source))
        items.splice(0, n, *range(n, 2 * n))
        assert len(fired) == 1
        return n

    def _merge_notifications(self) -> bool:
        """merge_deep N times into a watched tree; the watcher must fire N times."""
        n = self.fixed_n
        if not self.quiet:
            self.console.print(f"[yellow]Running Deep Merge Notifications (n={n:,})...[/yellow]")

        doc = gawk.wrap(_nested_record())
        counter = 0

        def on_change(node, source):
            nonlocal counter
            counter += 1

        gawk.watch(doc, on_change)
        foo = doc["foo"]

        start = time.perf_counter()
        for _ in range(n):
            gawk.merge_deep(
                foo,
                {
                    "bar": {
                        "baz": {
                            "a": random.random(),
                            "b": random.random(),
                            "c": random.random(),
                        }
                    }
                },
            )
        elapsed = time.perf_counter() - start

        self.results["merge"] = {
            "max_n": n,
            "operation_time": elapsed,
            "operations_per_second": n / elapsed if elapsed > 0 else float("inf"),
            "fired": counter,
        }
        return counter == n

    def _profile_memory(self) -> MemoryMetrics:
        n = self.fixed_n
        tracemalloc.start()
        try:
            kept = [gawk.wrap(_nested_record()) for _ in range(n)]
            current, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()
        del kept
        return MemoryMetrics(nodes=n, current_kb=current // 1024, peak_kb=peak // 1024)

    def _display_results(self, elapsed: float, merge_ok: bool) -> None:
        table = Table(title="📊 Benchmark Results")
        table.add_column("Benchmark", style="cyan", no_wrap=True)
        table.add_column("Workload", style="magenta")
        table.add_column("Performance", style="green", justify="right")

        labels = {
            "creation": ("Node Creation", "records"),
            "updates": ("Leaf Updates", "leaves"),
            "splice": ("List Splice", "elements"),
            "merge": ("Deep Merge", "merges"),
        }
        for key, (label, unit) in labels.items():
            result = self.results.get(key)
            if result is None:
                continue
            table.add_row(
                label,
                f"{result['max_n']:,} {unit}",
                f"{result['operations_per_second'] / 1000:.1f}K ops/sec",
            )

        self.console.print()
        self.console.print(table)

        self.console.print()
        self.console.print("Memory Usage")
        self.console.print(f"┣━ Records: {self.memory.nodes:,}")
        self.console.print(f"┣━ Retained: {self.memory.current_kb:,} KB")
        self.console.print(f"┣━ Peak: {self.memory.peak_kb:,} KB")
        self.console.print(f"┗━ Per Record: {self.memory.bytes_per_record:,.0f} bytes")

        fired = self.results["merge"]["fired"]
        self.console.print()
        if merge_ok:
            self.console.print(f"[green]✓[/green] Watcher fired {fired:,} times, once per merge")
        else:
            self.console.print(
                f"[red]✗[/red] Expected {self.fixed_n:,} notifications, got {fired:,}"
            )
        self.console.print(f"[dim]Benchmark completed in {elapsed:.2f} seconds[/dim]")


def print_config(fixed_n: int) -> None:
    """Print the current benchmark configuration."""
    print("Gawk Benchmark Configuration:")
    print(f"  TIME_LIMIT_SECONDS: {TIME_LIMIT_SECONDS}")
    print(f"  STARTING_N: {STARTING_N}")
    print(f"  SCALE_FACTOR: {SCALE_FACTOR}")
    print(f"  FIXED_N: {fixed_n}")


def main() -> int:
    """Main entry point for the benchmark script."""
    parser = argparse.ArgumentParser(description="Gawk Performance Benchmarks")
    parser.add_argument(
        "--n",
        type=int,
        default=DEFAULT_FIXED_N,
        help="Workload size for the deep merge and memory benchmarks",
    )
    parser.add_argument(
        "--config", action="store_true", help="Show current benchmark configuration"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output, show only final results",
    )
    args = parser.parse_args()

    if args.config:
        print_config(args.n)
        return 0

    if not args.quiet:
        print_config(args.n)
        print()

    return 0 if GawkBenchmark(args.n, quiet=args.quiet).run() else 1


if __name__ == "__main__":
    raise SystemExit(main())
