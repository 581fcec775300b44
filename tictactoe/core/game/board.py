"""
Board primitives and pure rule functions.

A board is a flat list of 9 cells indexed 0..8 row by row:

    0 | 1 | 2
    3 | 4 | 5
    6 | 7 | 8

Each cell is either None (empty) or a Symbol.
"""

from enum import Enum
from typing import List, Optional, Sequence, Tuple

BOARD_SIZE = 9
CENTER = 4
CORNERS: Tuple[int, ...] = (0, 2, 6, 8)

# Canonical scan order: rows, then columns, then diagonals.
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


class Symbol(str, Enum):
    """Player marks. X always belongs to the host, O to the guest or AI."""

    X = "X"
    O = "O"

    @property
    def opponent(self) -> "Symbol":
        return Symbol.O if self is Symbol.X else Symbol.X


Board = List[Optional[Symbol]]


def empty_board() -> Board:
    """Create a new board with all cells empty."""
    return [None] * BOARD_SIZE


def is_valid_index(index: int) -> bool:
    return 0 <= index < BOARD_SIZE


def empty_cells(board: Sequence[Optional[Symbol]]) -> List[int]:
    return [i for i, cell in enumerate(board) if cell is None]


def is_full(board: Sequence[Optional[Symbol]]) -> bool:
    return all(cell is not None for cell in board)


def find_winner(board: Sequence[Optional[Symbol]]) -> Optional[Symbol]:
    """Return the symbol owning a complete line, or None."""
    for a, b, c in WINNING_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return board[a]
    return None


def find_finishing_move(board: Sequence[Optional[Symbol]], symbol: Symbol) -> Optional[int]:
    """
    Find a cell that completes three-in-a-row for ``symbol``.

    Lines are scanned in canonical order; the first line holding exactly two
    ``symbol`` marks and one empty cell wins, and its empty cell is returned.

    Args:
        board: Board to inspect.
        symbol: Symbol whose winning cell is searched for.

    Returns:
        Index of the empty cell, or None if no line qualifies.
    """
    for line in WINNING_LINES:
        cells = [board[i] for i in line]
        if cells.count(symbol) == 2 and cells.count(None) == 1:
            return line[cells.index(None)]
    return None
