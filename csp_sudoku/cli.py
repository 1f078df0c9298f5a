"""Command-line interface for the CSP Sudoku solver."""

import argparse
import logging
import sys

from .benchmark import Benchmark
from .benchmark.visualizer import Visualizer
from .cases import load_cases
from .core.board import SudokuBoard
from .core.validator import check_puzzle
from .report import DEFAULT_STEPS, format_case, format_trace
from .solvers import CSPSolver


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="9x9 Sudoku solver using backtracking search with MRV, "
                    "Degree Heuristic and forward checking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a puzzle and show the first 5 search steps
  csp-sudoku solve --puzzle "..1..2.....5..6.3.46...5..."

  # Run the three built-in cases
  csp-sudoku cases

  # Time every case 5 times and chart the results
  csp-sudoku benchmark --repeats 5 --output results/
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Sudoku puzzle")
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, '.' or 0 for empty cells)"
    )
    solve_parser.add_argument(
        "--steps", type=int, default=DEFAULT_STEPS,
        help=f"Number of trace steps to print (default: {DEFAULT_STEPS})"
    )

    # Cases command
    cases_parser = subparsers.add_parser("cases", help="Solve the built-in example boards")
    cases_parser.add_argument(
        "--steps", type=int, default=DEFAULT_STEPS,
        help=f"Number of trace steps to print per case (default: {DEFAULT_STEPS})"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Time the solver on the built-in boards")
    bench_parser.add_argument(
        "--repeats", "-n", type=int, default=3,
        help="Solves per board (default: 3)"
    )
    bench_parser.add_argument(
        "--timeout", "-t", type=float, default=60.0,
        help="Seconds allowed per solve (default: 60)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s"
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "solve":
        cmd_solve(args)
    elif args.command == "cases":
        cmd_cases(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def cmd_solve(args):
    """Handle the solve command."""
    try:
        board = SudokuBoard.from_string(args.puzzle)
        check_puzzle(board)
    except ValueError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)

    print("Input puzzle:")
    print(board)
    print()

    solver = CSPSolver()
    solution, stats = solver.solve(board)

    print(format_trace(solver.trace, args.steps))
    if not stats.solved:
        print(f"✗ No solution ({stats.time_seconds:.4f}s)")
        sys.exit(2)

    print(f"✓ Solved in {stats.time_seconds:.4f}s")
    print(f"  Iterations: {stats.iterations:,}")
    print(f"  Backtracks: {stats.backtracks:,}")
    print(f"  Trace steps: {len(solver.trace):,}")
    print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")
    print(solution)


def cmd_cases(args):
    """Handle the cases command."""
    for name, board in load_cases().items():
        solver = CSPSolver(track_memory=False)
        solution, stats = solver.solve(board)
        print(format_case(name, solution, stats, solver.trace, args.steps))


def cmd_benchmark(args):
    """Handle the benchmark command."""
    benchmark = Benchmark(repeats=args.repeats, timeout_seconds=args.timeout)

    print("=" * 60)
    print("CSP SUDOKU SOLVER BENCHMARK")
    print("=" * 60)
    print(f"Puzzles: {', '.join(benchmark.puzzles)}")
    print(f"Repeats per puzzle: {args.repeats}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    for name, stats in summary["results_by_puzzle"].items():
        print(f"\n{name}:")
        print(f"  Accuracy: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Backtracks: {stats['backtracks']:,}")
        print(f"  Avg Memory: {stats['avg_memory_mb']:.2f} MB")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, benchmark.traces, args.output)
        for chart in visualizer.generate_all():
            print(f"  - {chart}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
