from tictactoe.data.repository import GameRepository

__all__ = [
    "GameRepository",
]
