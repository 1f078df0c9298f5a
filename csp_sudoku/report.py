"""Plain-text rendering of solver traces and case runs."""

from __future__ import annotations
from typing import Iterable, Optional

from .core.board import SudokuBoard
from .solvers.base_solver import SolverStats
from .solvers.trace import TraceRecord

DEFAULT_STEPS = 5


def format_step(index: int, record: TraceRecord) -> str:
    """Render one trace record; cells are shown 1-based."""
    row, col = record.cell
    return "\n".join([
        f"Step {index}",
        "Variable selected (row,column):",
        f"({row + 1},{col + 1})",
        "",
        "The domain size of the selected variable:",
        str(record.domain_size),
        "",
        "The degree of the selected variable:",
        str(record.degree),
        "",
        "The value assigned to the selected variable:",
        str(record.value),
        "",
        "Current board state:",
        str(record.board),
        "",
    ])


def format_trace(records: Iterable[TraceRecord], steps: Optional[int] = DEFAULT_STEPS) -> str:
    """Render the first ``steps`` records (all of them when None)."""
    records = list(records)
    if steps is not None:
        records = records[:steps]
    if not records:
        return "No assignments were made.\n"
    return "\n".join(format_step(i, r) for i, r in enumerate(records, 1))


def format_case(name: str, solution: Optional[SudokuBoard], stats: SolverStats,
                records: Iterable[TraceRecord], steps: Optional[int] = DEFAULT_STEPS) -> str:
    """Render a full case run: header, trace steps, result and timing."""
    banner = "=" * 60
    lines = [banner, name.upper().replace("_", " #"), banner, format_trace(records, steps)]
    if solution is not None:
        lines += ["Final solution:", str(solution)]
    else:
        lines.append("No solution exists for this board.")
    lines.append(f"CPU execution time in seconds: {stats.time_seconds:.6f}s")
    return "\n".join(lines) + "\n"
