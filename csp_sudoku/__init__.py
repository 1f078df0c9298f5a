"""9x9 Sudoku solving as a constraint-satisfaction problem."""

from .core import SudokuBoard, InvalidPuzzleError, check_puzzle
from .solvers import CSPSolver, TraceRecord

__version__ = "1.0.0"

__all__ = ["SudokuBoard", "InvalidPuzzleError", "check_puzzle", "CSPSolver", "TraceRecord"]
