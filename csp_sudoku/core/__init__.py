"""Core module for Sudoku board representation and validation."""

from .board import SudokuBoard
from .validator import InvalidPuzzleError, check_puzzle, find_conflicts, validate_solution

__all__ = ["SudokuBoard", "InvalidPuzzleError", "check_puzzle", "find_conflicts", "validate_solution"]
