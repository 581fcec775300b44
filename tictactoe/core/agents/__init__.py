from tictactoe.core.agents.base import Agent
from tictactoe.core.agents.heuristic import HeuristicAgent

__all__ = [
    "Agent",
    "HeuristicAgent",
]
