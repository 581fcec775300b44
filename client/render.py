"""
Plain-text rendering of games and the lobby.
"""

from typing import Any, Dict, List, Optional

FINISHED_STATUSES = ("WON", "DRAW")


def player_symbol_for(game: Dict[str, Any], player_id: str) -> str:
    """Symbol this player controls in ``game``: X for the host, O for the guest, ? otherwise."""
    if game.get("hostPlayerId") == player_id:
        return "X"
    if game.get("guestPlayerId") == player_id:
        return "O"
    return "?"


def is_finished(game: Dict[str, Any]) -> bool:
    return game.get("status") in FINISHED_STATUSES


def render_board(board: List[Optional[str]]) -> str:
    """Draw the 3x3 grid; empty cells show the key (1-9) that plays them."""
    cells = [cell if cell else str(i + 1) for i, cell in enumerate(board)]
    rows = [f" {cells[r * 3]} | {cells[r * 3 + 1]} | {cells[r * 3 + 2]}" for r in range(3)]
    return "\n---+---+---\n".join(rows)


def render_status(game: Dict[str, Any], my_symbol: str) -> str:
    status = game.get("status")
    if status == "WAITING_FOR_PLAYER":
        return "Waiting for an opponent to join..."
    if status == "WON":
        return f"Winner: {game.get('winner')}"
    if status == "DRAW":
        return "Result: Draw"
    if game.get("currentTurn") == my_symbol:
        return f"Your turn ({my_symbol})"
    return f"Opponent's turn ({game.get('currentTurn')})"


def render_game(game: Dict[str, Any], title: str, my_symbol: str) -> str:
    lines = [
        f"== {title}: {game.get('name')} ==",
        f"Game id: {game.get('id')}",
        f"You play: {my_symbol}",
        "",
        render_board(game.get("board", [None] * 9)),
        "",
        render_status(game, my_symbol),
    ]
    return "\n".join(lines)


def render_lobby(games: List[Dict[str, Any]]) -> str:
    if not games:
        return "No open PvP games. Press c to create one."
    lines = []
    for number, game in enumerate(games, start=1):
        lock = " [password]" if game.get("hasPassword") else ""
        lines.append(f"{number}. {game.get('name')}{lock}")
    return "\n".join(lines)


def game_over_message(game: Dict[str, Any], my_symbol: str, mode_label: str) -> str:
    if game.get("status") == "WON":
        winner = game.get("winner") or "Unknown"
        outcome = "You won!" if winner == my_symbol else "You lost."
        result_line = f"Winner: {winner} ({outcome})"
    else:
        result_line = "Result: Draw"
    return f"{mode_label} game finished.\nGame id: {game.get('id')}\n{result_line}"
