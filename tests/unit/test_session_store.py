"""
Tests for GameSessionStore: creation, lobby, join arbitration and move flow.
"""

import logging
import threading

import pytest

from tictactoe.core.exceptions import (
    ConflictError,
    GameNotFoundError,
    InvalidMoveError,
    InvalidStateError,
    UnauthorizedError,
)
from tictactoe.core.game import GameMode, GameSession, GameStatus, Symbol
from tictactoe.services import GameSessionStore, resolve_after_move


def play_pvp(store, game_id, host, guest, cells):
    """Alternate host/guest moves over ``cells``; return the last snapshot."""
    game = None
    for n, cell in enumerate(cells):
        game = store.play_move(game_id, host if n % 2 == 0 else guest, cell)
    return game


@pytest.fixture
def pvp_game(store, host_id, guest_id):
    game = store.create_pvp(host_id, "Friday match")
    return store.join_pvp(game["id"], guest_id)


# ---- Creation ----

def test_create_solo_game():
    store = GameSessionStore()
    game = store.create_solo("h1", "pytest")

    assert game["mode"] == "SOLO"
    assert game["name"] == "Solo game (pytest)"
    assert game["hostPlayerId"] == "h1"
    assert game["guestPlayerId"] == "AI"
    assert game["board"] == [None] * 9
    assert game["status"] == "IN_PROGRESS"
    assert game["currentTurn"] == "X"
    assert game["winner"] is None
    assert game["hasPassword"] is False
    assert game["createdAt"] == game["updatedAt"]


def test_create_pvp_game_waits_for_player(store, host_id):
    game = store.create_pvp(host_id, "Friday match")

    assert game["mode"] == "PVP"
    assert game["name"] == "Friday match"
    assert game["guestPlayerId"] is None
    assert game["status"] == "WAITING_FOR_PLAYER"
    assert game["currentTurn"] == "X"
    assert game["hasPassword"] is False


def test_create_pvp_with_password_hides_it(store, host_id):
    game = store.create_pvp(host_id, "Locked", "secret1")

    assert game["hasPassword"] is True
    assert "password" not in game
    assert "secret1" not in game.values()


def test_ids_are_unique(store, host_id):
    ids = {store.create_solo(host_id, "x")["id"] for _ in range(20)}
    assert len(ids) == 20


# ---- Lobby ----

def test_list_open_pvp_newest_first(store, host_id):
    for name in ("first", "second", "third"):
        store.create_pvp(host_id, name)

    names = [g["name"] for g in store.list_open_pvp()]
    assert names == ["third", "second", "first"]


def test_list_open_pvp_excludes_solo_and_started_games(store, host_id, guest_id):
    store.create_solo(host_id, "x")
    joined = store.create_pvp(host_id, "joined")
    store.join_pvp(joined["id"], guest_id)
    open_game = store.create_pvp(host_id, "open")

    listed = store.list_open_pvp()
    assert [g["id"] for g in listed] == [open_game["id"]]
    assert all("password" not in g for g in listed)


def test_list_open_pvp_empty(store):
    assert store.list_open_pvp() == []


# ---- Join ----

def test_join_password_scenario():
    store = GameSessionStore()
    game = store.create_pvp("h1", "Locked", "secret1")

    with pytest.raises(ConflictError):
        store.join_pvp(game["id"], "h1", "secret1")
    with pytest.raises(UnauthorizedError):
        store.join_pvp(game["id"], "g1", "wrong")

    joined = store.join_pvp(game["id"], "g1", "secret1")
    assert joined["status"] == "IN_PROGRESS"
    assert joined["guestPlayerId"] == "g1"
    assert joined["updatedAt"] >= joined["createdAt"]


def test_join_without_password_when_one_is_required(store, host_id, guest_id):
    game = store.create_pvp(host_id, "Locked", "secret1")
    with pytest.raises(UnauthorizedError):
        store.join_pvp(game["id"], guest_id)


def test_join_open_game_ignores_supplied_password(store, host_id, guest_id):
    game = store.create_pvp(host_id, "Open")
    joined = store.join_pvp(game["id"], guest_id, "whatever")
    assert joined["guestPlayerId"] == guest_id


def test_join_unknown_game(store, guest_id):
    with pytest.raises(GameNotFoundError):
        store.join_pvp("nope", guest_id)


def test_join_solo_game_is_invalid(store, host_id, guest_id):
    game = store.create_solo(host_id, "x")
    with pytest.raises(InvalidStateError):
        store.join_pvp(game["id"], guest_id)


@pytest.mark.parametrize("password", [None, "secret1", "wrong"])
def test_join_started_game_is_invalid_regardless_of_password(store, host_id, guest_id, password):
    game = store.create_pvp(host_id, "Locked", "secret1")
    store.join_pvp(game["id"], guest_id, "secret1")

    with pytest.raises(InvalidStateError):
        store.join_pvp(game["id"], "third-player", password)


def test_failed_join_leaves_game_untouched(store, host_id, guest_id):
    game = store.create_pvp(host_id, "Locked", "secret1")
    with pytest.raises(UnauthorizedError):
        store.join_pvp(game["id"], guest_id, "wrong")

    assert store.get_session(game["id"]) == game


# ---- Fetch ----

def test_get_session(store, host_id):
    game = store.create_pvp(host_id, "Friday match", "secret1")
    assert store.get_session(game["id"]) == game


def test_get_unknown_session(store):
    with pytest.raises(GameNotFoundError):
        store.get_session("does-not-exist")


# ---- Moves: solo ----

def test_solo_scenario_ai_takes_corner_after_centre():
    store = GameSessionStore()
    game = store.create_solo("h1", "pytest")

    game = store.play_move(game["id"], "h1", 4)

    assert game["board"] == ["O", None, None, None, "X", None, None, None, None]
    assert game["currentTurn"] == "X"
    assert game["status"] == "IN_PROGRESS"


def test_solo_ai_blocks_two_in_a_row(store, host_id):
    game = store.create_solo(host_id, "x")
    game = store.play_move(game["id"], host_id, 0)  # AI takes centre
    assert game["board"][4] == "O"

    game = store.play_move(game["id"], host_id, 1)
    assert game["board"][:3] == ["X", "X", "O"]
    assert game["currentTurn"] == "X"


def test_solo_ai_can_win(store, host_id):
    game = store.create_solo(host_id, "x")
    store.play_move(game["id"], host_id, 0)  # AI: centre 4
    store.play_move(game["id"], host_id, 8)  # AI: corner 2
    game = store.play_move(game["id"], host_id, 1)  # AI completes 2-4-6

    assert game["status"] == "WON"
    assert game["winner"] == "O"
    assert game["board"][6] == "O"


def test_solo_human_win_gets_no_ai_reply(store, host_id, caplog):
    game = store.create_solo(host_id, "x")
    store.play_move(game["id"], host_id, 0)  # AI: centre 4
    store.play_move(game["id"], host_id, 8)  # AI: corner 2
    store.play_move(game["id"], host_id, 6)  # AI blocks 7
    with caplog.at_level(logging.INFO, logger="tictactoe.services.session_store"):
        game = store.play_move(game["id"], host_id, 3)  # X completes 0-3-6

    assert game["status"] == "WON"
    assert game["winner"] == "X"
    assert game["board"].count("O") == 3
    assert game["board"] == ["X", None, "O", "X", "O", None, "X", "O", "X"]
    assert any("finished: WON" in r.getMessage() for r in caplog.records)


def test_solo_human_cannot_play_as_ai(store, host_id):
    game = store.create_solo(host_id, "x")
    with pytest.raises(UnauthorizedError):
        store.play_move(game["id"], "AI", 0)


# ---- Moves: PvP ----

def test_moves_before_join_are_rejected(store, host_id):
    game = store.create_pvp(host_id, "Friday match")
    with pytest.raises(InvalidStateError):
        store.play_move(game["id"], host_id, 0)


def test_turns_alternate(store, pvp_game, host_id, guest_id):
    game_id = pvp_game["id"]
    turns = [pvp_game["currentTurn"]]
    for n, cell in enumerate([0, 3, 1, 4]):
        game = store.play_move(game_id, host_id if n % 2 == 0 else guest_id, cell)
        turns.append(game["currentTurn"])

    assert turns == ["X", "O", "X", "O", "X"]
    assert game["board"][:5] == ["X", "X", None, "O", "O"]


def test_wrong_turn_is_unauthorized_and_board_unchanged(store, pvp_game, guest_id):
    with pytest.raises(UnauthorizedError):
        store.play_move(pvp_game["id"], guest_id, 0)

    assert store.get_session(pvp_game["id"]) == pvp_game


def test_stranger_cannot_move(store, pvp_game):
    with pytest.raises(UnauthorizedError):
        store.play_move(pvp_game["id"], "stranger", 0)


def test_occupied_cell_conflicts(store, pvp_game, host_id, guest_id):
    store.play_move(pvp_game["id"], host_id, 4)
    with pytest.raises(ConflictError):
        store.play_move(pvp_game["id"], guest_id, 4)


def test_occupied_cell_checked_before_turn(store, pvp_game, host_id):
    store.play_move(pvp_game["id"], host_id, 4)
    # Host is out of turn and the cell is taken: the occupied cell is reported.
    with pytest.raises(ConflictError):
        store.play_move(pvp_game["id"], host_id, 4)


@pytest.mark.parametrize("index", [-1, 9, 42])
def test_out_of_range_index(store, pvp_game, host_id, index):
    with pytest.raises(InvalidMoveError):
        store.play_move(pvp_game["id"], host_id, index)


def test_win_ends_game(store, pvp_game, host_id, guest_id):
    game = play_pvp(store, pvp_game["id"], host_id, guest_id, [0, 3, 1, 4, 2])

    assert game["status"] == "WON"
    assert game["winner"] == "X"
    assert game["currentTurn"] == "X"

    with pytest.raises(InvalidStateError):
        store.play_move(pvp_game["id"], guest_id, 5)


def test_draw_ends_game(store, pvp_game, host_id, guest_id):
    game = play_pvp(store, pvp_game["id"], host_id, guest_id, [0, 1, 2, 4, 3, 5, 7, 6, 8])

    assert game["board"] == ["X", "O", "X", "X", "O", "O", "O", "X", "X"]
    assert game["status"] == "DRAW"
    assert game["winner"] is None

    with pytest.raises(InvalidStateError):
        store.play_move(pvp_game["id"], guest_id, 0)


def test_finished_game_reports_state_before_occupied_cell(store, pvp_game, host_id, guest_id):
    play_pvp(store, pvp_game["id"], host_id, guest_id, [0, 3, 1, 4, 2])
    with pytest.raises(InvalidStateError):
        store.play_move(pvp_game["id"], guest_id, 0)


def test_move_on_unknown_game(store, host_id):
    with pytest.raises(GameNotFoundError):
        store.play_move("missing", host_id, 0)


def test_failed_move_does_not_touch_updated_at(store, pvp_game, host_id):
    game = store.play_move(pvp_game["id"], host_id, 0)
    with pytest.raises(ConflictError):
        store.play_move(pvp_game["id"], host_id, 0)

    assert store.get_session(pvp_game["id"])["updatedAt"] == game["updatedAt"]


def test_concurrent_moves_are_serialized(store, pvp_game, host_id):
    results = []
    errors = []
    barrier = threading.Barrier(8)

    def attempt(cell):
        barrier.wait()
        try:
            results.append(store.play_move(pvp_game["id"], host_id, cell))
        except UnauthorizedError as e:
            errors.append(e)

    threads = [threading.Thread(target=attempt, args=(cell,)) for cell in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 1
    assert len(errors) == 7
    board = store.get_session(pvp_game["id"])["board"]
    assert board.count("X") == 1
    assert board.count("O") == 0


# ---- Post-move resolution ----

def test_resolve_after_move_flips_turn():
    session = GameSession(mode=GameMode.PVP, name="t", host_player_id="h", status=GameStatus.IN_PROGRESS)
    session.board[0] = Symbol.X
    resolve_after_move(session)

    assert session.current_turn is Symbol.O
    assert session.status is GameStatus.IN_PROGRESS


def test_resolve_after_move_sets_winner_without_flipping():
    session = GameSession(mode=GameMode.PVP, name="t", host_player_id="h", status=GameStatus.IN_PROGRESS)
    session.board[0:3] = [Symbol.X, Symbol.X, Symbol.X]
    resolve_after_move(session)

    assert session.status is GameStatus.WON
    assert session.winner is Symbol.X
    assert session.current_turn is Symbol.X


@pytest.mark.parametrize(
    "status, finished",
    [
        (GameStatus.WAITING_FOR_PLAYER, False),
        (GameStatus.IN_PROGRESS, False),
        (GameStatus.WON, True),
        (GameStatus.DRAW, True),
    ],
)
def test_status_is_finished(status, finished):
    assert status.is_finished is finished
