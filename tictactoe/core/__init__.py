"""
Core domain layer for tic-tac-toe.

Exposes board rules, the session record, the AI agent and the public snapshot.
"""

from tictactoe.core.game import AI_PLAYER_ID, GameMode, GameSession, GameStatus, Symbol
from tictactoe.core.agents import Agent, HeuristicAgent
from tictactoe.core.snapshot import serialize_snapshot

__all__ = [
    "AI_PLAYER_ID",
    "GameMode",
    "GameSession",
    "GameStatus",
    "Symbol",
    "Agent",
    "HeuristicAgent",
    "serialize_snapshot",
]
