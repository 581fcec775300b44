"""
Game session record and its enums.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from tictactoe.core.game.board import Board, Symbol, empty_board

AI_PLAYER_ID = "AI"


class GameMode(str, Enum):
    SOLO = "SOLO"
    PVP = "PVP"


class GameStatus(str, Enum):
    """Lifecycle of a session. WON and DRAW are terminal."""

    WAITING_FOR_PLAYER = "WAITING_FOR_PLAYER"
    IN_PROGRESS = "IN_PROGRESS"
    WON = "WON"
    DRAW = "DRAW"

    @property
    def is_finished(self) -> bool:
        return self in (GameStatus.WON, GameStatus.DRAW)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class GameSession:
    """Complete state of one game, including the join password."""

    mode: GameMode
    name: str
    host_player_id: str
    guest_player_id: Optional[str] = None
    status: GameStatus = GameStatus.WAITING_FOR_PLAYER
    password: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    board: Board = field(default_factory=empty_board)
    current_turn: Symbol = Symbol.X
    winner: Optional[Symbol] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.updated_at is None:
            self.updated_at = self.created_at

    @property
    def has_password(self) -> bool:
        return bool(self.password)

    def expected_player_id(self) -> Optional[str]:
        """Player allowed to move for ``current_turn`` (host plays X, guest plays O)."""
        if self.current_turn is Symbol.X:
            return self.host_player_id
        return self.guest_player_id

    def copy(self) -> "GameSession":
        """Detached copy that can be mutated without touching this record."""
        return replace(self, board=list(self.board))

    def touch(self) -> None:
        self.updated_at = utcnow()

    def __repr__(self) -> str:
        return (
            f"GameSession(id='{self.id}', mode={self.mode.value}, "
            f"status={self.status.value}, turn={self.current_turn.value})"
        )
