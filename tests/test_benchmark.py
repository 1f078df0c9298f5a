"""Tests for the benchmark harness and charts."""

import json
import os

import pytest
from csp_sudoku.benchmark import Benchmark, Visualizer
from csp_sudoku.core.board import SudokuBoard
from csp_sudoku.core.validator import InvalidPuzzleError


TEST_PUZZLE = (
    "53..7...."
    "6..195..."
    ".98....6."
    "8...6...3"
    "4..8.3..1"
    "7...2...6"
    ".6....28."
    "...419..5"
    "....8..79"
)


@pytest.fixture
def benchmark():
    bench = Benchmark(
        puzzles={"classic": SudokuBoard.from_string(TEST_PUZZLE)},
        repeats=2,
        track_memory=False,
    )
    bench.run(show_progress=False)
    return bench


class TestBenchmark:
    """Tests for Benchmark."""

    def test_runs_every_repeat(self, benchmark):
        assert len(benchmark.results) == 2
        assert all(r.solved for r in benchmark.results)
        assert [r.run for r in benchmark.results] == [0, 1]

    def test_summary(self, benchmark):
        summary = benchmark.get_summary()
        stats = summary["results_by_puzzle"]["classic"]

        assert summary["total_runs"] == 2
        assert stats["accuracy"] == 100.0
        assert stats["total_solved"] == 2

    def test_keeps_first_trace(self, benchmark):
        assert len(benchmark.traces["classic"]) == benchmark.results[0].nodes_explored

    def test_save_results(self, benchmark, tmp_path):
        benchmark.save_results(str(tmp_path))

        with open(tmp_path / "benchmark_results.json") as f:
            results = json.load(f)
        assert results[0]["puzzle"] == "classic"
        assert results[0]["trace_length"] == benchmark.results[0].nodes_explored

        with open(tmp_path / "benchmark_traces.json") as f:
            traces = json.load(f)
        assert traces["classic"][0]["board"].count(".") < TEST_PUZZLE.count(".")
        assert os.path.exists(tmp_path / "benchmark_summary.json")

    def test_rejects_inconsistent_puzzle(self):
        bad = SudokuBoard.from_string("55" + TEST_PUZZLE[2:])
        with pytest.raises(InvalidPuzzleError):
            Benchmark(puzzles={"bad": bad})

    def test_defaults_to_builtin_cases(self):
        assert list(Benchmark(repeats=1).puzzles) == ["case_1", "case_2", "case_3"]


class TestVisualizer:
    """Tests for Visualizer."""

    def test_generate_all(self, benchmark, tmp_path):
        visualizer = Visualizer(benchmark.results, benchmark.traces, str(tmp_path))
        charts = visualizer.generate_all()

        assert len(charts) == 2
        for chart in charts:
            assert os.path.exists(chart)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
