"""The fixed puzzles exercised by the ``cases`` command."""

from typing import Dict

from .core.board import SudokuBoard

BOARD_CASES: Dict[str, str] = {
    "case_1": (
        "..1..2..."
        "..5..6.3."
        "46...5..."
        "...1.4..."
        "6..8..143"
        "....9.5.8"
        "8...49.5."
        "1..32...."
        "..9...3.."
    ),
    "case_2": (
        "..5.1...."
        "..2..4.3."
        "1.9...2.6"
        "2...3...."
        ".4....7.."
        "5....7..1"
        "...6.3..."
        ".6.1....."
        "....7..5."
    ),
    "case_3": (
        "67......."
        ".25......"
        ".9.56.2.."
        "3...8.9.."
        "......8.1"
        "...47...."
        "..86...9."
        ".......1."
        "1.6.5..7."
    ),
}


def load_cases() -> Dict[str, SudokuBoard]:
    """Fresh boards for every fixed case, keyed by name."""
    return {name: SudokuBoard.from_string(s) for name, s in BOARD_CASES.items()}
