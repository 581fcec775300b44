"""
Public snapshot serialization of GameSession.

Produces a sanitized, client-friendly view of a game without
exposing hidden information (the join password).
"""

from __future__ import annotations

from typing import Any, Dict

from tictactoe.core.game.session import GameSession


def serialize_snapshot(session: GameSession) -> Dict[str, Any]:
    """Serialize a GameSession into a public, stable JSON dict.

    The snapshot includes every field of the session except ``password``;
    ``hasPassword`` reports whether one is set. Keys are camelCase, board
    cells are "X", "O" or None and timestamps are ISO-8601 strings.
    """
    return {
        "id": session.id,
        "mode": session.mode.value,
        "name": session.name,
        "hostPlayerId": session.host_player_id,
        "guestPlayerId": session.guest_player_id,
        "board": [cell.value if cell is not None else None for cell in session.board],
        "currentTurn": session.current_turn.value,
        "status": session.status.value,
        "winner": session.winner.value if session.winner is not None else None,
        "createdAt": session.created_at.isoformat(),
        "updatedAt": session.updated_at.isoformat(),
        "hasPassword": session.has_password,
    }
