"""Base solver interface: instrumentation and cooperative cancellation."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import logging
import threading
import time
import tracemalloc

from ..core.board import SudokuBoard

log = logging.getLogger(__name__)


@dataclass
class SolverStats:
    """Counters for one solve."""
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    # Recursive calls, restores after a failed candidate, and trace records.
    iterations: int = 0
    backtracks: int = 0
    nodes_explored: int = 0

    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """
    Common front door for solvers.

    ``solve`` works on a copy and measures it. ``cancel`` may be called from
    another thread at any time, including before the search starts; the
    request stays pending until a search observes it.
    """

    name: str = "BaseSolver"

    def __init__(self, track_memory: bool = True):
        self.track_memory = track_memory
        self.stats = SolverStats(algorithm=self.name)
        self._cancel_event = threading.Event()

    def cancel(self) -> None:
        """Ask a running or upcoming search to stop at its next decision level."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def _begin(self) -> None:
        """Fresh stats for a search; a pending cancel request is kept."""
        self.stats = SolverStats(algorithm=self.name)

    def _finish(self, solved: bool, steps: int) -> None:
        """Record how the search ended and consume any cancel request."""
        if self._cancel_event.is_set():
            self.stats.extra["cancelled"] = True
            self._cancel_event.clear()
            log.debug("%s cancelled after %d steps", self.name, steps)
        self.stats.extra["trace_length"] = steps
        log.debug("%s finished: solved=%s iterations=%d backtracks=%d",
                  self.name, solved, self.stats.iterations, self.stats.backtracks)

    def solve(self, board: SudokuBoard) -> tuple[Optional[SudokuBoard], SolverStats]:
        """
        Solve a copy of ``board`` with timing and peak-memory tracking.

        Returns:
            Tuple of (solution or None, stats).
        """
        self._begin()

        # Nested tracemalloc sessions would reset an outer caller's trace.
        tracing = self.track_memory and not tracemalloc.is_tracing()
        if tracing:
            tracemalloc.start()
        start_time = time.perf_counter()

        try:
            solution = self._solve(board.copy())
            self.stats.solved = solution is not None and solution.is_solved()
        except Exception as e:
            log.exception("%s failed", self.name)
            self.stats.extra["error"] = str(e)
            solution = None
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            if tracing:
                _, self.stats.memory_bytes = tracemalloc.get_traced_memory()
                tracemalloc.stop()

        return solution, self.stats

    @abstractmethod
    def _solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        """Solve ``board`` (a private copy) in place; None if unsolvable."""
