"""
Custom exception hierarchy for the tic-tac-toe engine and services.

Provides typed errors that can be handled consistently across
the core engine, services, and API layer.
"""


class TicTacToeError(Exception):
    """Base exception for all game-related errors."""


class GameNotFoundError(TicTacToeError):
    """Game does not exist."""


class InvalidStateError(TicTacToeError):
    """Operation is not applicable to the game's current mode or status."""


class NoLegalMoveError(InvalidStateError):
    """The AI was asked to move on a board without empty cells."""


class InvalidMoveError(TicTacToeError):
    """Cell index is outside the board."""


class ConflictError(TicTacToeError):
    """Request collides with existing state (occupied cell, host joining own game)."""


class UnauthorizedError(TicTacToeError):
    """Caller is not allowed to act (wrong turn, wrong password)."""
