"""9x9 Sudoku board representation."""

from __future__ import annotations
import numpy as np
from typing import List, Tuple, Optional, Set

SIZE = 9
BOX_SIZE = 3
EMPTY_CHARS = ('.', '0')


class SudokuBoard:
    """
    Represents a standard 9x9 Sudoku board with 3x3 boxes.

    Cells hold 0 when unassigned and 1-9 otherwise.
    """

    size = SIZE
    box_size = BOX_SIZE

    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Initialize a Sudoku board.

        Args:
            grid: Optional initial 9x9 grid. If None, creates empty board.
        """
        if grid is not None:
            if grid.shape != (SIZE, SIZE):
                raise ValueError(f"Grid shape must be ({SIZE}, {SIZE}), got {grid.shape}")
            if grid.min() < 0 or grid.max() > SIZE:
                raise ValueError(f"Grid values must be 0-{SIZE}")
            self.grid = grid.copy().astype(np.int32)
        else:
            self.grid = np.zeros((SIZE, SIZE), dtype=np.int32)

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board."""
        new_board = SudokuBoard()
        new_board.grid = self.grid.copy()
        return new_board

    def frozen_copy(self) -> SudokuBoard:
        """Create a copy whose grid rejects writes."""
        new_board = self.copy()
        new_board.grid.setflags(write=False)
        return new_board

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col). Use 0 to clear."""
        if value < 0 or value > SIZE:
            raise ValueError(f"Value must be 0-{SIZE}, got {value}")
        self.grid[row, col] = value

    def clear(self, row: int, col: int) -> None:
        """Clear the cell at position (row, col)."""
        self.grid[row, col] = 0

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.grid[row, col] == 0

    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self.grid[:, col]

    @staticmethod
    def box_origin(row: int, col: int) -> Tuple[int, int]:
        """Top-left cell of the box containing (row, col)."""
        return (row // BOX_SIZE) * BOX_SIZE, (col // BOX_SIZE) * BOX_SIZE

    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get all values in the box containing (row, col)."""
        box_row, box_col = self.box_origin(row, col)
        return self.grid[box_row:box_row + BOX_SIZE,
                        box_col:box_col + BOX_SIZE].flatten()

    def get_candidates(self, row: int, col: int) -> Set[int]:
        """
        Get all values not yet used by the peers of an empty cell.

        Returns:
            Set of values (1 to 9) that can be placed at (row, col).
            Returns empty set if cell is not empty.
        """
        if not self.is_empty(row, col):
            return set()

        used = set(self.get_row(row).tolist())
        used |= set(self.get_col(col).tolist())
        used |= set(self.get_box(row, col).tolist())

        return set(range(1, SIZE + 1)) - used

    def get_empty_cells(self) -> List[Tuple[int, int]]:
        """Get list of all empty cell positions in row-major order."""
        rows, cols = np.nonzero(self.grid == 0)
        return list(zip(rows.tolist(), cols.tolist()))

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self.grid == 0))

    def count_filled(self) -> int:
        """Count the number of filled cells."""
        return int(np.sum(self.grid != 0))

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def units(self) -> List[np.ndarray]:
        """All 27 units (rows, columns, boxes) as flat value arrays."""
        units = [self.get_row(i) for i in range(SIZE)]
        units += [self.get_col(j) for j in range(SIZE)]
        units += [self.get_box(r, c)
                  for r in range(0, SIZE, BOX_SIZE)
                  for c in range(0, SIZE, BOX_SIZE)]
        return units

    def is_valid(self) -> bool:
        """
        Check if the current board state is valid.
        Does not check if solution is complete, only if no conflicts exist.
        """
        for unit in self.units():
            non_zero = unit[unit != 0]
            if len(non_zero) != len(set(non_zero.tolist())):
                return False
        return True

    def is_solved(self) -> bool:
        """Check if the puzzle is completely and correctly solved."""
        return self.is_complete() and self.is_valid()

    def to_string(self) -> str:
        """Convert board to an 81-char string, '.' for empty cells."""
        return ''.join('.' if v == 0 else str(v) for v in self.grid.flatten().tolist())

    def to_rows(self) -> List[List[str]]:
        """Convert board to 9 rows of single characters."""
        s = self.to_string()
        return [list(s[i:i + SIZE]) for i in range(0, SIZE * SIZE, SIZE)]

    @classmethod
    def from_string(cls, s: str) -> SudokuBoard:
        """
        Create a board from a string representation.

        Args:
            s: String of length 81. '.' or '0' for empty, '1'-'9' for clues.
               Whitespace is ignored.
        """
        s = ''.join(s.split())
        if len(s) != SIZE * SIZE:
            raise ValueError(f"String length must be {SIZE * SIZE}, got {len(s)}")

        grid = np.zeros((SIZE, SIZE), dtype=np.int32)
        for idx, c in enumerate(s):
            if c in EMPTY_CHARS:
                continue
            if c not in '123456789':
                raise ValueError(f"Invalid character {c!r} at position {idx}")
            grid[idx // SIZE, idx % SIZE] = int(c)

        return cls(grid)

    @classmethod
    def from_rows(cls, rows: List[List[str]]) -> SudokuBoard:
        """Create a board from 9 rows of 9 characters each."""
        if len(rows) != SIZE or any(len(row) != SIZE for row in rows):
            raise ValueError(f"Board must be {SIZE} rows of {SIZE} cells")
        return cls.from_string(''.join(''.join(row) for row in rows))

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(SIZE):
                val = self.grid[i, j]
                row_str += ' .' if val == 0 else f' {val}'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())
