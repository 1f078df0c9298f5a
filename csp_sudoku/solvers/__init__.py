"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, SolverStats
from .csp_solver import CSPSolver
from .domains import DomainStore, DomainSnapshot
from .trace import TraceRecord, TraceRecorder

__all__ = [
    "BaseSolver",
    "SolverStats",
    "CSPSolver",
    "DomainStore",
    "DomainSnapshot",
    "TraceRecord",
    "TraceRecorder",
]
