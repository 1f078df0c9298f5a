"""Timing harness for the CSP solver."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from concurrent.futures import ThreadPoolExecutor, TimeoutError
import json
import logging
import os

from tqdm import tqdm

from ..core.board import SudokuBoard
from ..core.validator import check_puzzle
from ..cases import load_cases
from ..solvers import CSPSolver

log = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    puzzle: str
    run: int
    solved: bool
    time_seconds: float
    memory_bytes: int
    iterations: int
    backtracks: int
    nodes_explored: int
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle": self.puzzle,
            "run": self.run,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            **self.extra
        }


class Benchmark:
    """
    Repeatedly solves a set of named puzzles and collects performance metrics.

    Each run gets a fresh solver so no state leaks between solves.
    """

    def __init__(
        self,
        puzzles: Optional[Dict[str, SudokuBoard]] = None,
        repeats: int = 3,
        timeout_seconds: float = 60.0,
        track_memory: bool = True
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles: Dict of puzzle_name -> board (default: the fixed cases).
            repeats: Number of solves per puzzle.
            timeout_seconds: Maximum time per solve.
            track_memory: Measure peak memory with tracemalloc.

        Raises:
            InvalidPuzzleError: if any puzzle's clues conflict.
        """
        self.puzzles = puzzles if puzzles is not None else load_cases()
        for board in self.puzzles.values():
            check_puzzle(board)
        self.repeats = repeats
        self.timeout_seconds = timeout_seconds
        self.track_memory = track_memory
        self.results: List[BenchmarkResult] = []
        self.traces: Dict[str, list] = {}

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run every puzzle ``repeats`` times.

        Returns:
            List of BenchmarkResult objects.
        """
        self.results = []
        self.traces = {}

        total_tests = len(self.puzzles) * self.repeats
        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for name, puzzle in self.puzzles.items():
            for run in range(self.repeats):
                self.results.append(self._run_single(name, run, puzzle))
                pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(self, name: str, run: int, puzzle: SudokuBoard) -> BenchmarkResult:
        """Run a fresh solver on a single puzzle."""
        solver = CSPSolver(track_memory=self.track_memory)

        with ThreadPoolExecutor(max_workers=1) as executor:
            future = executor.submit(solver.solve, puzzle)
            try:
                _, stats = future.result(timeout=self.timeout_seconds)
            except TimeoutError:
                log.debug("%s run %d timed out after %.1fs", name, run, self.timeout_seconds)
                solver.cancel()
                future.result()
                return BenchmarkResult(
                    puzzle=name,
                    run=run,
                    solved=False,
                    time_seconds=self.timeout_seconds,
                    memory_bytes=0,
                    iterations=0,
                    backtracks=0,
                    nodes_explored=0,
                    extra={"error": "Timeout"}
                )

        if name not in self.traces:
            self.traces[name] = list(solver.trace)

        return BenchmarkResult(
            puzzle=name,
            run=run,
            solved=stats.solved,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            iterations=stats.iterations,
            backtracks=stats.backtracks,
            nodes_explored=stats.nodes_explored,
            extra=dict(stats.extra)
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics grouped by puzzle."""
        summary = {
            "total_runs": len(self.results),
            "repeats": self.repeats,
            "results_by_puzzle": {}
        }

        for name in self.puzzles:
            puzzle_results = [r for r in self.results if r.puzzle == name]
            if puzzle_results:
                solved = [r for r in puzzle_results if r.solved]
                times = [r.time_seconds for r in puzzle_results]
                memory = [r.memory_bytes for r in puzzle_results]

                summary["results_by_puzzle"][name] = {
                    "accuracy": len(solved) / len(puzzle_results) * 100,
                    "avg_time_seconds": sum(times) / len(times),
                    "max_time_seconds": max(times),
                    "min_time_seconds": min(times),
                    "avg_memory_mb": sum(memory) / len(memory) / (1024 * 1024),
                    "backtracks": puzzle_results[0].backtracks,
                    "nodes_explored": puzzle_results[0].nodes_explored,
                    "total_solved": len(solved),
                    "total_tested": len(puzzle_results)
                }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results, summary and first-run traces as JSON."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        traces_file = os.path.join(output_dir, "benchmark_traces.json")
        with open(traces_file, "w") as f:
            json.dump({name: [r.to_dict() for r in records]
                       for name, records in self.traces.items()}, f, indent=2)

        print(f"Results saved to {output_dir}")
