"""Tests for the CSP backtracking solver."""

import pytest
from csp_sudoku.cases import BOARD_CASES, load_cases
from csp_sudoku.core.board import SudokuBoard
from csp_sudoku.core.validator import validate_solution
from csp_sudoku.solvers import CSPSolver, DomainStore


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

TEST_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)

# Row 0 forces 8 into both (0,7) and (0,8).
DEAD_END_PUZZLE = (
    "1234567.."
    "........."
    "........."
    "........."
    ".......9."
    "........."
    "........."
    "........9"
    "........."
)


class CheckingSolver(CSPSolver):
    """Asserts the domain invariants every time forward checking runs."""

    def forward_check(self, board):
        assert self.domains.is_consistent()
        for row, col in board.get_empty_cells():
            assert set(self.domains.candidates(row, col)) == board.get_candidates(row, col)
        return super().forward_check(board)


class CancellingSolver(CSPSolver):
    """Requests cancellation as soon as the first assignment is checked."""

    def forward_check(self, board):
        self.cancel()
        return super().forward_check(board)


class LateCancellingSolver(CSPSolver):
    """Requests cancellation on the 40th forward check, noting the trace length then."""

    def __init__(self):
        super().__init__(track_memory=False)
        self.checks = 0
        self.trace_at_cancel = None

    def forward_check(self, board):
        self.checks += 1
        if self.checks == 40:
            self.trace_at_cancel = len(self.trace)
            self.cancel()
        return super().forward_check(board)


class TestSolve:
    """End-to-end solving behaviour."""

    def test_solve_puzzle(self):
        """Test solving a known puzzle."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        solver = CSPSolver()

        solution, stats = solver.solve(board)

        assert stats.solved
        assert solution is not None
        assert solution.to_string() == TEST_SOLUTION
        assert board.to_string() == TEST_PUZZLE

    def test_solve_sudoku_mutates_in_place(self):
        board = SudokuBoard.from_string(TEST_PUZZLE)
        assert CSPSolver().solve_sudoku(board)
        assert board.to_string() == TEST_SOLUTION

    @pytest.mark.parametrize("name", sorted(BOARD_CASES))
    def test_builtin_cases(self, name):
        """Each built-in case solves to a valid grid keeping its clues."""
        puzzle = load_cases()[name]
        solution, stats = CSPSolver().solve(puzzle)

        assert stats.solved
        assert validate_solution(puzzle, solution)

    def test_empty_board(self):
        """An empty board has many solutions; any valid one will do."""
        solution, stats = CSPSolver().solve(SudokuBoard())
        assert stats.solved
        assert solution.is_solved()

    def test_single_blank_takes_one_step(self):
        board = SudokuBoard.from_string("." + TEST_SOLUTION[1:])
        solver = CSPSolver()

        assert solver.solve_sudoku(board)
        assert board.to_string() == TEST_SOLUTION
        assert len(solver.trace) == 1

        step = solver.trace[0]
        assert step.cell == (0, 0)
        assert step.domain_size == 1
        assert step.degree == 0
        assert step.value == 5

    def test_already_solved_board(self):
        board = SudokuBoard.from_string(TEST_SOLUTION)
        solver = CSPSolver()
        assert solver.solve_sudoku(board)
        assert len(solver.trace) == 0

    def test_dead_end_returns_false_and_restores_board(self):
        """A failed level clears its cell instead of leaving the last digit tried."""
        board = SudokuBoard.from_string(DEAD_END_PUZZLE)
        solver = CSPSolver()

        solution, stats = solver.solve(board)
        assert solution is None
        assert not stats.solved

        assert not solver.solve_sudoku(board)
        assert board.to_string() == DEAD_END_PUZZLE
        assert solver.stats.backtracks == 1

    def test_zero_domain_at_root_fails_immediately(self):
        board = SudokuBoard.from_string("12345678." + "........9" + "." * 63)
        solver = CSPSolver()
        assert not solver.solve_sudoku(board)
        assert len(solver.trace) == 0
        assert solver.stats.iterations == 1

    def test_deterministic(self):
        """Two solves of the same board give identical solutions and traces."""
        puzzle = load_cases()["case_1"]
        first, second = CSPSolver(), CSPSolver()

        solution_a, _ = first.solve(puzzle)
        solution_b, _ = second.solve(puzzle)

        assert solution_a == solution_b
        assert first.trace.to_dicts() == second.trace.to_dicts()

    def test_solver_reuse_starts_fresh(self):
        solver = CSPSolver()
        solver.solve(load_cases()["case_2"])
        solver.solve(SudokuBoard.from_string("." + TEST_SOLUTION[1:]))
        assert len(solver.trace) == 1
        assert solver.stats.extra["trace_length"] == 1

    def test_domain_invariant_holds_during_search(self):
        solution, stats = CheckingSolver().solve(SudokuBoard.from_string(TEST_PUZZLE))
        assert stats.solved

    def test_stats_collected(self):
        solver = CSPSolver()
        _, stats = solver.solve(SudokuBoard.from_string(TEST_PUZZLE))

        assert stats.time_seconds > 0
        assert stats.iterations > 0
        assert stats.nodes_explored == len(solver.trace)
        assert stats.memory_bytes > 0

    def test_cancel_stops_search(self):
        board = load_cases()["case_1"]
        clues = board.to_string()
        solver = CancellingSolver()

        assert not solver.solve_sudoku(board)
        assert solver.stats.extra["cancelled"]
        assert board.to_string() == clues

    def test_cancel_before_solve_is_honoured(self):
        """A request made before the search starts is not lost."""
        board = load_cases()["case_3"]
        clues = board.to_string()
        solver = CSPSolver()

        solver.cancel()
        assert not solver.solve_sudoku(board)
        assert solver.stats.extra["cancelled"]
        assert len(solver.trace) == 0
        assert board.to_string() == clues

    def test_cancel_request_is_consumed(self):
        solver = CSPSolver(track_memory=False)
        solver.cancel()
        solution, stats = solver.solve(load_cases()["case_1"])
        assert solution is None
        assert stats.extra["cancelled"]

        solution, stats = solver.solve(load_cases()["case_1"])
        assert stats.solved
        assert "cancelled" not in stats.extra

    def test_cancel_stops_recording(self):
        """No further candidates are tried once cancellation is seen."""
        solver = LateCancellingSolver()
        assert not solver.solve_sudoku(load_cases()["case_3"])

        assert solver.trace_at_cancel is not None
        assert len(solver.trace) <= solver.trace_at_cancel + 1
        assert solver.checks == 40


class TestTrace:
    """Contents of the decision trace produced by a search."""

    def test_case_1_first_steps(self):
        """First five decisions on case 1: (cell, domain size, degree, value)."""
        solver = CSPSolver(track_memory=False)
        assert solver.solve_sudoku(load_cases()["case_1"])

        steps = [(r.cell, r.domain_size, r.degree, r.value) for r in solver.trace.head(5)]
        assert steps == [
            ((4, 5), 1, 8, 7),
            ((4, 2), 1, 11, 2),
            ((7, 5), 1, 10, 8),
            ((4, 4), 1, 8, 5),
            ((4, 1), 1, 11, 9),
        ]

    def test_abandoned_branches_are_recorded(self):
        """Some recorded assignment on case 2 disagrees with the final solution."""
        board = load_cases()["case_2"]
        solver = CSPSolver(track_memory=False)
        assert solver.solve_sudoku(board)

        abandoned = [r for r in solver.trace if board.get(*r.cell) != r.value]
        assert abandoned
        assert solver.stats.backtracks > 0


class TestSelector:
    """MRV selection with Degree Heuristic tie-breaking."""

    def _solver_for(self, board):
        solver = CSPSolver()
        solver.domains = DomainStore()
        solver.domains.initialize(board)
        return solver

    def test_empty_board_picks_first_cell(self):
        board = SudokuBoard()
        assert self._solver_for(board).select_variable(board) == ((0, 0), 20)

    def test_full_board_returns_sentinel(self):
        board = SudokuBoard.from_string(TEST_SOLUTION)
        assert self._solver_for(board).select_variable(board) == (None, -1)

    def test_degree_breaks_ties(self):
        """Equal domain sizes go to the later cell when its degree is larger."""
        board = SudokuBoard()
        board.set(0, 1, 1)
        solver = CSPSolver()
        solver.domains.remove(0, 0, 9)
        solver.domains.remove(4, 4, 9)

        assert solver.degree(board, 0, 0) == 19
        assert solver.degree(board, 4, 4) == 20
        assert solver.select_variable(board) == ((4, 4), 20)

    def test_smaller_domain_beats_higher_degree(self):
        board = SudokuBoard()
        board.set(0, 1, 1)
        solver = CSPSolver()
        solver.domains.remove(0, 0, 8)
        solver.domains.remove(0, 0, 9)
        solver.domains.remove(4, 4, 9)

        assert solver.select_variable(board) == ((0, 0), 19)

    def test_never_selects_assigned_cell(self):
        board = SudokuBoard()
        board.set(0, 0, 1)
        solver = CSPSolver()
        for value in range(1, 10):
            solver.domains.remove(0, 0, value)

        cell, degree = solver.select_variable(board)
        assert cell != (0, 0)
        assert board.is_empty(*cell)
        # First cell in row-major order whose row, column and box are all open.
        assert (cell, degree) == ((1, 3), 20)

    def test_equal_degree_keeps_first_cell(self):
        board = SudokuBoard()
        board.set(0, 0, 1)
        solver = self._solver_for(board)
        assert solver.select_variable(board) == ((0, 1), 19)

    def test_degree_skips_box_cells_in_same_row_or_column(self):
        board = SudokuBoard()
        board.set(0, 0, 3)
        board.set(1, 1, 4)
        # Row 0: 7, column 1: 7, box cells off row 0 and column 1: (1,0), (1,2), (2,0), (2,2).
        assert CSPSolver.degree(board, 0, 1) == 18


class TestPropagation:
    """assign_value and forward_check."""

    def test_assign_value_prunes_peers(self):
        board = SudokuBoard()
        solver = CSPSolver()

        solver.assign_value(board, 2, 2, 6)

        assert board.get(2, 2) == 6
        assert not solver.domains.has(2, 8, 6)
        assert not solver.domains.has(8, 2, 6)
        assert not solver.domains.has(0, 0, 6)
        assert solver.domains.has(3, 3, 6)
        assert solver.domains.count(2, 8) == 8

    def test_forward_check_ignores_assigned_cells(self):
        board = SudokuBoard()
        solver = CSPSolver()
        solver.assign_value(board, 0, 0, 1)
        for value in range(2, 10):
            solver.domains.remove(0, 0, value)
        assert solver.forward_check(board)

        for value in range(2, 10):
            solver.domains.remove(5, 5, value)
        solver.domains.remove(5, 5, 1)
        assert not solver.forward_check(board)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
