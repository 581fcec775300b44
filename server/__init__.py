"""
Server package exposing the FastAPI app and its game session store.
"""

from .app import app, get_store, store  # noqa: F401
