"""
GameSessionStore owns every live game and is the only place game state changes.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from tictactoe.core.agents import Agent, HeuristicAgent
from tictactoe.core.exceptions import (
    ConflictError,
    InvalidMoveError,
    InvalidStateError,
    UnauthorizedError,
)
from tictactoe.core.game.board import Symbol, find_winner, is_full, is_valid_index
from tictactoe.core.game.session import AI_PLAYER_ID, GameMode, GameSession, GameStatus
from tictactoe.core.snapshot import serialize_snapshot
from tictactoe.data import GameRepository

logger = logging.getLogger(__name__)


def resolve_after_move(session: GameSession) -> None:
    """Update status, winner and turn after a symbol was placed.

    1. A complete line ends the game as WON for that line's symbol.
    2. Otherwise a full board ends the game as DRAW.
    3. Otherwise the turn passes to the other symbol.
    """
    winner = find_winner(session.board)
    if winner is not None:
        session.status = GameStatus.WON
        session.winner = winner
        return

    if is_full(session.board):
        session.status = GameStatus.DRAW
        return

    session.current_turn = session.current_turn.opponent


class GameSessionStore:
    """Use-case service for creating, joining and playing games.

    Every operation returns a public snapshot (see ``serialize_snapshot``).
    Mutations run under the session's lock and are applied to a copy that
    replaces the stored record only after all checks passed.
    """

    def __init__(self, repo: Optional[GameRepository] = None, agent: Optional[Agent] = None):
        self.repo = repo or GameRepository()
        self.agent = agent or HeuristicAgent(Symbol.O)

    def create_solo(self, host_player_id: str, client_label: str) -> Dict[str, Any]:
        """Start a game against the AI; the host plays X and moves first."""
        session = GameSession(
            mode=GameMode.SOLO,
            name=f"Solo game ({client_label})",
            host_player_id=host_player_id,
            guest_player_id=AI_PLAYER_ID,
            status=GameStatus.IN_PROGRESS,
        )
        self.repo.add(session)
        logger.info(f"Created solo game {session.id} for {host_player_id}")
        return serialize_snapshot(session)

    def create_pvp(self, host_player_id: str, name: str, password: Optional[str] = None) -> Dict[str, Any]:
        """Open a PvP game that waits for a second player."""
        session = GameSession(
            mode=GameMode.PVP,
            name=name,
            host_player_id=host_player_id,
            password=password or None,
        )
        self.repo.add(session)
        logger.info(f"Created PvP game {session.id} '{name}' (password={session.has_password})")
        return serialize_snapshot(session)

    def list_open_pvp(self) -> List[Dict[str, Any]]:
        """PvP games waiting for a second player, newest first."""
        # reversed() makes later-created games win ties on created_at (sorted is stable)
        open_games = [
            s for s in reversed(self.repo.list_all())
            if s.mode is GameMode.PVP and s.status is GameStatus.WAITING_FOR_PLAYER
        ]
        open_games.sort(key=lambda s: s.created_at, reverse=True)
        return [serialize_snapshot(s) for s in open_games]

    def join_pvp(self, game_id: str, player_id: str, password: Optional[str] = None) -> Dict[str, Any]:
        """
        Take the guest seat of an open PvP game.

        Raises:
            GameNotFoundError: unknown game id
            InvalidStateError: not a PvP game, or not waiting for a player
            ConflictError: the host tries to join their own game
            UnauthorizedError: the game has a password and it does not match
        """
        with self.repo.locked(game_id) as current:
            if current.mode is not GameMode.PVP:
                raise InvalidStateError("Only PvP games can be joined")
            if current.status is not GameStatus.WAITING_FOR_PLAYER:
                raise InvalidStateError("This game is not waiting for a second player")
            if current.host_player_id == player_id:
                raise ConflictError("Host cannot join the same game as guest")
            if current.password and current.password != password:
                logger.warning(f"Rejected join of game {game_id}: invalid password")
                raise UnauthorizedError("Invalid game password")

            session = current.copy()
            session.guest_player_id = player_id
            session.status = GameStatus.IN_PROGRESS
            session.touch()
            self.repo.save(session)

        logger.info(f"Player {player_id} joined game {game_id}")
        return serialize_snapshot(session)

    def get_session(self, game_id: str) -> Dict[str, Any]:
        return serialize_snapshot(self.repo.get(game_id))

    def play_move(self, game_id: str, player_id: str, index: int) -> Dict[str, Any]:
        """
        Place the current player's symbol, then let the AI answer in solo games.

        Checks run in this order: game status, cell index, occupied cell,
        turn ownership. Nothing is stored unless all of them pass.

        Raises:
            GameNotFoundError: unknown game id
            InvalidStateError: the game is not in progress
            InvalidMoveError: index outside 0..8
            ConflictError: the cell is already occupied
            UnauthorizedError: it is not this player's turn
        """
        with self.repo.locked(game_id) as current:
            if current.status is not GameStatus.IN_PROGRESS:
                raise InvalidStateError("Game is not active")
            if not is_valid_index(index):
                raise InvalidMoveError(f"Cell index must be between 0 and 8, got {index}")
            if current.board[index] is not None:
                raise ConflictError("Cell is already occupied")
            if current.expected_player_id() != player_id:
                logger.warning(f"Rejected move in game {game_id}: not {player_id}'s turn")
                raise UnauthorizedError("It is not your turn")

            session = current.copy()
            session.board[index] = session.current_turn
            resolve_after_move(session)

            if (
                session.mode is GameMode.SOLO
                and session.status is GameStatus.IN_PROGRESS
                and session.current_turn is Symbol.O
            ):
                ai_move = self.agent.choose_move(session.board)
                session.board[ai_move] = Symbol.O
                resolve_after_move(session)
                logger.debug(f"AI played cell {ai_move} in game {game_id}")

            session.touch()
            self.repo.save(session)

        logger.info(f"Move {index} by {player_id} in game {game_id} -> {session.status.value}")
        if session.status.is_finished:
            logger.info(f"Game {game_id} finished: {session.status.value} (winner={session.winner})")
        return serialize_snapshot(session)
