"""Backtracking CSP solver with MRV, Degree Heuristic and forward checking."""

from __future__ import annotations
import logging
from typing import Optional, Tuple

import numpy as np

from .base_solver import BaseSolver
from .domains import DomainStore
from .trace import TraceRecorder
from ..core.board import SudokuBoard, SIZE, BOX_SIZE

log = logging.getLogger(__name__)

Cell = Tuple[int, int]


class CSPSolver(BaseSolver):
    """
    Sudoku solver treating each cell as a CSP variable with domain {1..9}.

    This solver uses:
    - Domain tracking: candidate flags and a cached count per cell.
    - MRV: the unassigned cell with the fewest candidates is tried next.
    - Degree Heuristic: breaks MRV ties in favour of the cell constraining
      the most unassigned cells.
    - Forward checking: an assignment fails as soon as any unassigned cell
      runs out of candidates.

    Every successful tentative assignment is appended to ``self.trace``.
    """

    name = "CSP+MRV+Degree"

    def __init__(self, track_memory: bool = True):
        super().__init__(track_memory=track_memory)
        self.domains = DomainStore()
        self.trace = TraceRecorder()

    def _solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        if self.solve_sudoku(board):
            return board
        return None

    def solve_sudoku(self, board: SudokuBoard) -> bool:
        """
        Solve ``board`` in place.

        Returns:
            True if the board now holds a solution. On False the board is
            left holding only its original clues.
        """
        self.domains = DomainStore()
        self.trace = TraceRecorder()
        self._begin()

        self.domains.initialize(board)
        log.debug("Solving puzzle with %d clues", board.count_filled())
        solved = False
        try:
            solved = self._backtrack(board)
        finally:
            self._finish(solved, len(self.trace))
        return solved

    def _backtrack(self, board: SudokuBoard) -> bool:
        """
        Recursive backtracking over one decision level.

        Returns True if solution found, False otherwise.
        """
        if self.cancelled:
            return False
        self.stats.iterations += 1

        cell, degree = self.select_variable(board)
        if cell is None:
            return True

        row, col = cell
        if self.domains.count(row, col) == 0:
            return False

        saved = self.domains.snapshot()

        for value in self.domains.candidates(row, col):
            domain_size = self.domains.count(row, col)
            self.assign_value(board, row, col, value)

            if self.forward_check(board):
                self.stats.nodes_explored += 1
                self.trace.record(cell, board, domain_size, degree, value)
                if self._backtrack(board):
                    return True

            self.domains.restore(saved)
            self.stats.backtracks += 1
            if self.cancelled:
                break

        # Leave no stale digit behind for the parent level.
        board.clear(row, col)
        return False

    def assign_value(self, board: SudokuBoard, row: int, col: int, value: int) -> None:
        """Place ``value`` at (row, col) and strike it from every peer's domain."""
        board.set(row, col, value)
        self.domains.eliminate(row, col, value)

    def forward_check(self, board: SudokuBoard) -> bool:
        """False if any unassigned cell has no candidates left."""
        return not np.any((board.grid == 0) & (self.domains.counts() == 0))

    def select_variable(self, board: SudokuBoard) -> Tuple[Optional[Cell], int]:
        """
        Select an unassigned cell by Minimum Remaining Values.

        Ties on domain size go to the cell with the strictly greater degree,
        so the first cell in row-major order wins among equals.

        Returns:
            ((row, col), degree), or (None, -1) when the board is full.
        """
        best: Optional[Cell] = None
        best_count = SIZE + 1
        best_degree = -1

        for row, col in board.get_empty_cells():
            count = self.domains.count(row, col)
            if count < best_count:
                best, best_count = (row, col), count
                best_degree = self.degree(board, row, col)
            elif count == best_count:
                degree = self.degree(board, row, col)
                if degree > best_degree:
                    best, best_degree = (row, col), degree

        return best, best_degree

    @staticmethod
    def degree(board: SudokuBoard, row: int, col: int) -> int:
        """
        Count unassigned cells constrained by (row, col).

        Row and column peers are counted directly; box peers only when they
        share neither the row nor the column.
        """
        grid = board.grid
        degree = 0

        for i in range(SIZE):
            if i != col and grid[row, i] == 0:
                degree += 1
            if i != row and grid[i, col] == 0:
                degree += 1

        box_row, box_col = SudokuBoard.box_origin(row, col)
        for i in range(box_row, box_row + BOX_SIZE):
            for j in range(box_col, box_col + BOX_SIZE):
                if i != row and j != col and grid[i, j] == 0:
                    degree += 1

        return degree
