"""Per-cell candidate tracking for the CSP solver."""

from __future__ import annotations
from dataclasses import dataclass
from typing import List

import numpy as np

from ..core.board import SudokuBoard, SIZE, BOX_SIZE

# Slot 0 of every cell holds the cached candidate count.
COUNT = 0


@dataclass(frozen=True, eq=False)
class DomainSnapshot:
    """An independent, read-only copy of a DomainStore's state."""
    table: np.ndarray

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DomainSnapshot):
            return NotImplemented
        return np.array_equal(self.table, other.table)


class DomainStore:
    """
    Candidate flags and counts for all 81 cells.

    The table has shape (9, 9, 10): ``table[r, c, v]`` is 1 while digit
    ``v`` is still legal at (r, c), and ``table[r, c, 0]`` caches how many
    digits are left.
    """

    def __init__(self):
        self.table = np.zeros((SIZE, SIZE, SIZE + 1), dtype=np.int8)
        self.reset()

    def reset(self) -> None:
        """Give every cell the full domain {1..9}."""
        self.table[:, :, 1:] = 1
        self.table[:, :, COUNT] = SIZE

    def initialize(self, board: SudokuBoard) -> None:
        """Reset, then prune the peers of every clue in row-major order."""
        self.reset()
        for row in range(SIZE):
            for col in range(SIZE):
                value = board.get(row, col)
                if value != 0:
                    self.eliminate(row, col, value)

    def count(self, row: int, col: int) -> int:
        return int(self.table[row, col, COUNT])

    def counts(self) -> np.ndarray:
        """9x9 view of the cached counts."""
        return self.table[:, :, COUNT]

    def has(self, row: int, col: int, value: int) -> bool:
        return bool(self.table[row, col, value])

    def candidates(self, row: int, col: int) -> List[int]:
        """Remaining digits for (row, col) in ascending order."""
        return (np.flatnonzero(self.table[row, col, 1:]) + 1).tolist()

    def remove(self, row: int, col: int, value: int) -> int:
        """Drop ``value`` from one cell; returns how many flags were cleared."""
        removed = int(self.table[row, col, value])
        self.table[row, col, COUNT] -= removed
        self.table[row, col, value] = 0
        return removed

    def eliminate(self, row: int, col: int, value: int) -> None:
        """
        Remove ``value`` from every cell sharing a row, column or box with
        (row, col), the cell itself included.
        """
        box_row, box_col = SudokuBoard.box_origin(row, col)
        units = (
            (row, slice(None)),
            (slice(None), col),
            (slice(box_row, box_row + BOX_SIZE), slice(box_col, box_col + BOX_SIZE)),
        )
        for rows, cols in units:
            cells = self.table[rows, cols]
            cells[..., COUNT] -= cells[..., value]
            cells[..., value] = 0

    def snapshot(self) -> DomainSnapshot:
        table = self.table.copy()
        table.setflags(write=False)
        return DomainSnapshot(table)

    def restore(self, snapshot: DomainSnapshot) -> None:
        np.copyto(self.table, snapshot.table)

    def is_consistent(self) -> bool:
        """True when every cached count matches its candidate flags."""
        return bool(np.array_equal(self.table[:, :, COUNT],
                                   self.table[:, :, 1:].sum(axis=2)))

    def __repr__(self) -> str:
        return f"DomainStore(remaining={int(self.counts().sum())})"
