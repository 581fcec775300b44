"""
Polling terminal client for the tic-tac-toe server.
"""

from .api import ApiClient, ApiError  # noqa: F401
from .app import TerminalApp  # noqa: F401
