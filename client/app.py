"""
Line-oriented terminal front end.

The app keeps no game rules of its own: every move goes to the server and
the screen is redrawn from the returned game. While it is not the local
player's turn (or nobody has joined yet) the app polls the server.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Callable, Dict, List, Optional

from client.api import ApiClient, ApiError
from client.render import (
    game_over_message,
    is_finished,
    player_symbol_for,
    render_game,
    render_lobby,
)

logger = logging.getLogger(__name__)

MAX_GAME_NAME = 40
HOME_MENU = "1) Solo vs Computer\n2) PvP\nq) Exit"
LOBBY_HELP = "[number] join  c) create  r) refresh  b) back  q) quit"


class QuitRequested(Exception):
    """User asked to leave the app."""


class TerminalApp:
    """
    Main application state: one generated player id, the current screen
    loop, and the injected I/O used to talk to the user.
    """

    def __init__(
        self,
        api: ApiClient,
        *,
        player_id: Optional[str] = None,
        client_name: str = "python-terminal-client",
        poll_interval: float = 1.0,
        wait_prompt_polls: int = 15,
        input_func: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.api = api
        self.player_id = player_id or str(uuid.uuid4())
        self.client_name = client_name
        self.poll_interval = poll_interval
        self.wait_prompt_polls = wait_prompt_polls
        self._input = input_func
        self._output = output
        self._sleep = sleep

    def run(self) -> None:
        self._output(f"Tic-Tac-Toe (player id {self.player_id})")
        try:
            while True:
                self.home()
        except (QuitRequested, EOFError, KeyboardInterrupt):
            self._output("Bye!")

    # ---- Screens ----

    def home(self) -> None:
        self._output("\n" + HOME_MENU)
        choice = self._ask("> ")
        if choice == "1":
            self.play_solo()
        elif choice == "2":
            self.lobby()
        else:
            self._output("Choose 1, 2 or q.")

    def play_solo(self) -> None:
        try:
            game = self.api.create_solo_game(self.player_id, self.client_name)
        except ApiError as e:
            self._output(f"Could not start solo game: {e}")
            return
        self.play_game(game, "Solo")

    def lobby(self) -> None:
        games = self._load_open_games()
        while True:
            self._output("\n== PvP Lobby ==\n" + render_lobby(games) + "\n" + LOBBY_HELP)
            choice = self._ask("> ")
            if choice == "b":
                return
            if choice == "r":
                games = self._load_open_games()
            elif choice == "c":
                game = self.create_pvp()
                if game is not None:
                    self.play_game(game, "PvP")
                games = self._load_open_games()
            elif choice.isdigit() and 1 <= int(choice) <= len(games):
                game = self.join(games[int(choice) - 1])
                if game is not None:
                    self.play_game(game, "PvP")
                games = self._load_open_games()
            else:
                self._output("Unknown choice.")

    def create_pvp(self) -> Optional[Dict[str, Any]]:
        name = self._ask(f"Game name (3-{MAX_GAME_NAME} chars): ")
        if len(name) < 3:
            self._output("Game name must be at least 3 chars")
            return None
        if len(name) > MAX_GAME_NAME:
            self._output(f"Game name must be at most {MAX_GAME_NAME} chars")
            return None
        password = self._ask("Password (optional, Enter to skip): ") or None
        try:
            return self.api.create_pvp_game(self.player_id, name, password)
        except ApiError as e:
            self._output(f"Create game failed: {e}")
            return None

    def join(self, game: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        password = None
        if game.get("hasPassword"):
            password = self._ask("Password: ") or None
        try:
            return self.api.join_pvp_game(self.player_id, game["id"], password)
        except ApiError as e:
            self._output(f"Join failed: {e}")
            return None

    def play_game(self, game: Dict[str, Any], mode_label: str) -> None:
        """Drive one game until it finishes or the user goes back."""
        title = f"{mode_label} Mode"
        shown_version = None
        polls = 0
        while True:
            my_symbol = player_symbol_for(game, self.player_id)
            if game.get("updatedAt") != shown_version:
                self._output("\n" + render_game(game, title, my_symbol))
                shown_version = game.get("updatedAt")
                polls = 0

            if is_finished(game):
                self._output(game_over_message(game, my_symbol, mode_label))
                return

            if game.get("status") != "IN_PROGRESS" or game.get("currentTurn") != my_symbol:
                if polls >= self.wait_prompt_polls:
                    polls = 0
                    if self._ask("Still waiting. Enter to keep waiting, b back: ") == "b":
                        return
                # No push channel; poll the server for the opponent's move.
                self._sleep(self.poll_interval)
                game = self._refresh(game)
                polls += 1
                continue

            choice = self._ask("Cell 1-9 (b back, q quit): ")
            if choice == "b":
                return
            if not (choice.isdigit() and 1 <= int(choice) <= 9):
                self._output("Enter a number between 1 and 9.")
                continue
            try:
                game = self.api.play_move(self.player_id, game["id"], int(choice) - 1)
            except ApiError as e:
                self._output(f"Move failed: {e}")

    # ---- Helpers ----

    def _ask(self, prompt: str) -> str:
        answer = self._input(prompt).strip()
        if answer == "q":
            raise QuitRequested()
        return answer

    def _load_open_games(self) -> List[Dict[str, Any]]:
        try:
            return self.api.list_open_pvp_games()
        except ApiError as e:
            self._output(f"Could not load PvP games: {e}")
            return []

    def _refresh(self, game: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return self.api.get_game(game["id"])
        except ApiError as e:
            logger.debug(f"Poll failed for game {game['id']}: {e}")
            return game
