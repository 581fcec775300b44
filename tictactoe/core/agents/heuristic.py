"""Rule-based agent: win, block, centre, corner, first free cell."""

from typing import Optional, Sequence

from tictactoe.core.agents.base import Agent
from tictactoe.core.exceptions import NoLegalMoveError
from tictactoe.core.game.board import CENTER, CORNERS, Symbol, empty_cells, find_finishing_move


class HeuristicAgent(Agent):
    """
    Deterministic opponent that never looks further than one move ahead.

    Priority order (first match wins):
    1. Complete its own line
    2. Block the opponent's line
    3. Take the centre
    4. Take the first empty corner (0, 2, 6, 8)
    5. Take the first empty cell
    """

    def choose_move(self, board: Sequence[Optional[Symbol]]) -> int:
        free = empty_cells(board)
        if not free:
            raise NoLegalMoveError("No legal AI move found")

        winning = find_finishing_move(board, self.symbol)
        if winning is not None:
            return winning

        blocking = find_finishing_move(board, self.symbol.opponent)
        if blocking is not None:
            return blocking

        if board[CENTER] is None:
            return CENTER

        for corner in CORNERS:
            if board[corner] is None:
                return corner

        return free[0]
