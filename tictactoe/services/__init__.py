"""
Application services layer.

Provides use-case oriented services that glue the core rules with
session storage.
"""

from .session_store import GameSessionStore, resolve_after_move

__all__ = ["GameSessionStore", "resolve_after_move"]
