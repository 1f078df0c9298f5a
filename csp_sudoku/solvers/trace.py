"""Decision trace recorded by the CSP solver."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Tuple

from ..core.board import SudokuBoard


@dataclass(frozen=True)
class TraceRecord:
    """One successful tentative assignment made during search."""
    cell: Tuple[int, int]
    domain_size: int
    degree: int
    value: int
    board: SudokuBoard

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary."""
        return {
            "row": self.cell[0],
            "col": self.cell[1],
            "domain_size": self.domain_size,
            "degree": self.degree,
            "value": self.value,
            "board": self.board.to_string(),
        }


class TraceRecorder:
    """
    Append-only, ordered log of TraceRecords.

    Every forward step is kept, including steps on branches that were
    later abandoned by backtracking.
    """

    def __init__(self):
        self._records: List[TraceRecord] = []

    def record(self, cell: Tuple[int, int], board: SudokuBoard,
               domain_size: int, degree: int, value: int) -> TraceRecord:
        """Append a record holding a frozen copy of ``board``."""
        entry = TraceRecord(
            cell=cell,
            domain_size=domain_size,
            degree=degree,
            value=value,
            board=board.frozen_copy(),
        )
        self._records.append(entry)
        return entry

    @property
    def records(self) -> Tuple[TraceRecord, ...]:
        return tuple(self._records)

    def head(self, n: int = 5) -> Tuple[TraceRecord, ...]:
        """The first ``n`` records (fewer if the trace is shorter)."""
        return tuple(self._records[:n])

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [r.to_dict() for r in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TraceRecord]:
        return iter(tuple(self._records))

    def __getitem__(self, index: int) -> TraceRecord:
        return self._records[index]
