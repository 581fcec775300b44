"""
Repository pattern for game session storage.

Holds every live session in process memory. This is the seam where a
persistent backing store would be substituted; the rule engine and the
store service only rely on the methods below.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List

from tictactoe.core.exceptions import GameNotFoundError
from tictactoe.core.game.session import GameSession

logger = logging.getLogger(__name__)


class GameRepository:
    """
    In-memory repository for game sessions.

    A store-wide lock guards the id -> session mapping; each session also
    owns a lock that callers hold across a read-validate-write sequence via
    :meth:`locked`.
    """

    def __init__(self):
        self._games: Dict[str, GameSession] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def add(self, session: GameSession) -> GameSession:
        """
        Register a new session.

        Args:
            session: Freshly created session with a unique id

        Returns:
            The stored session
        """
        with self._lock:
            self._games[session.id] = session
            self._locks[session.id] = threading.Lock()
        logger.info(f"Stored game: {session.id} ({session.mode.value})")
        return session

    def get(self, game_id: str) -> GameSession:
        """
        Fetch a session by id.

        Raises:
            GameNotFoundError: if no session has this id
        """
        with self._lock:
            session = self._games.get(game_id)
        if session is None:
            raise GameNotFoundError("Game was not found")
        return session

    def save(self, session: GameSession) -> GameSession:
        """Replace the stored record for an existing session."""
        with self._lock:
            if session.id not in self._games:
                raise GameNotFoundError("Game was not found")
            self._games[session.id] = session
        return session

    def list_all(self) -> List[GameSession]:
        """All sessions in insertion order."""
        with self._lock:
            return list(self._games.values())

    @contextmanager
    def locked(self, game_id: str) -> Iterator[GameSession]:
        """
        Hold the session's lock and yield its current record.

        Only one ``locked`` block per session id runs at a time, so the
        record yielded here cannot be replaced by another caller until the
        block exits.

        Raises:
            GameNotFoundError: if no session has this id
        """
        with self._lock:
            lock = self._locks.get(game_id)
        if lock is None:
            raise GameNotFoundError("Game was not found")
        with lock:
            yield self.get(game_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)
