"""Shared test fixtures for tic-tac-toe tests."""

import uuid

import pytest
from fastapi.testclient import TestClient

from server.app import app, get_store
from tictactoe.services import GameSessionStore


@pytest.fixture
def store():
    """Fresh, empty session store."""
    return GameSessionStore()


@pytest.fixture
def host_id():
    return str(uuid.uuid4())


@pytest.fixture
def guest_id():
    return str(uuid.uuid4())


@pytest.fixture
def client(store):
    """TestClient bound to the app with an isolated store."""
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
