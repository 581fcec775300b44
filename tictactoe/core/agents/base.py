"""Base class for all tic-tac-toe agents."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from tictactoe.core.game.board import Symbol


class Agent(ABC):
    """
    Abstract base class for computer opponents.

    All agents must implement the `choose_move` method to select
    an empty cell on the board.

    Attributes:
        symbol: The mark this agent places.
    """

    def __init__(self, symbol: Symbol = Symbol.O):
        """
        Initialize the agent.

        Args:
            symbol: The mark this agent places.
        """
        self.symbol = symbol

    @abstractmethod
    def choose_move(self, board: Sequence[Optional[Symbol]]) -> int:
        """
        Choose a cell to play.

        Args:
            board: Current board; must contain at least one empty cell.

        Returns:
            Index (0..8) of an empty cell.
        """
        pass
