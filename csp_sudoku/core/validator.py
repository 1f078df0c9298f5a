"""Validation utilities for Sudoku puzzles."""

from __future__ import annotations
from typing import List, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .board import SudokuBoard


class InvalidPuzzleError(ValueError):
    """Raised when a puzzle's clues already violate a constraint."""

    def __init__(self, conflicts: List[Tuple[str, int, int]]):
        self.conflicts = conflicts
        details = ", ".join(f"{kind} {index + 1} repeats {value}"
                            for kind, index, value in conflicts)
        super().__init__(f"Inconsistent puzzle: {details}")


def find_conflicts(board: SudokuBoard) -> List[Tuple[str, int, int]]:
    """
    Find digits that appear more than once in a unit.

    Returns:
        List of (unit kind, unit index, value) tuples, where kind is
        "row", "column" or "box" and boxes are numbered row-major.
    """
    conflicts = []
    kinds = ["row"] * board.size + ["column"] * board.size + ["box"] * board.size
    for position, (kind, unit) in enumerate(zip(kinds, board.units())):
        seen = set()
        for value in unit.tolist():
            if value == 0:
                continue
            if value in seen:
                conflicts.append((kind, position % board.size, value))
            seen.add(value)
    return conflicts


def check_puzzle(board: SudokuBoard) -> None:
    """
    Reject a puzzle whose clues conflict before it reaches a solver.

    Raises:
        InvalidPuzzleError: if any row, column or box repeats a digit.
    """
    conflicts = find_conflicts(board)
    if conflicts:
        raise InvalidPuzzleError(conflicts)


def validate_solution(puzzle: SudokuBoard, solution: SudokuBoard) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if solution is valid and matches puzzle clues.
    """
    clues = puzzle.grid != 0
    if (puzzle.grid[clues] != solution.grid[clues]).any():
        return False

    return solution.is_solved()
