from tictactoe.core.game.board import (
    BOARD_SIZE,
    CENTER,
    CORNERS,
    WINNING_LINES,
    Board,
    Symbol,
    empty_board,
    empty_cells,
    find_finishing_move,
    find_winner,
    is_full,
    is_valid_index,
)
from tictactoe.core.game.session import AI_PLAYER_ID, GameMode, GameSession, GameStatus

__all__ = [
    "BOARD_SIZE",
    "CENTER",
    "CORNERS",
    "WINNING_LINES",
    "Board",
    "Symbol",
    "empty_board",
    "empty_cells",
    "find_finishing_move",
    "find_winner",
    "is_full",
    "is_valid_index",
    "AI_PLAYER_ID",
    "GameMode",
    "GameSession",
    "GameStatus",
]
