"""
HTTP client for the tic-tac-toe server.

Thin wrapper around httpx: one method per endpoint, JSON game dicts out,
``ApiError`` for every non-2xx response.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Request reached the server (or tried to) and did not succeed."""

    def __init__(self, status_code: Optional[int], detail: str):
        self.status_code = status_code
        self.detail = detail
        if status_code is None:
            super().__init__(detail)
        else:
            super().__init__(f"request failed with {status_code}: {detail}")


class ApiClient:
    """Service wrapper for the game endpoints."""

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        timeout: float = 5.0,
        client: Optional[httpx.Client] = None,
    ):
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def create_solo_game(self, player_id: str, client_name: str) -> Dict[str, Any]:
        return self._request("POST", "/games/solo", json={"playerId": player_id, "clientName": client_name})

    def create_pvp_game(self, player_id: str, name: str, password: Optional[str] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"playerId": player_id, "name": name}
        if password:
            payload["password"] = password
        return self._request("POST", "/games/pvp", json=payload)

    def list_open_pvp_games(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/games/pvp/open")

    def join_pvp_game(self, player_id: str, game_id: str, password: Optional[str] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"playerId": player_id}
        if password:
            payload["password"] = password
        return self._request("POST", f"/games/pvp/{game_id}/join", json=payload)

    def get_game(self, game_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/games/{game_id}")

    def play_move(self, player_id: str, game_id: str, index: int) -> Dict[str, Any]:
        return self._request("POST", f"/games/{game_id}/move", json={"playerId": player_id, "index": index})

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        try:
            resp = self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiError(None, f"could not reach server: {e}") from e

        if resp.is_error:
            raise ApiError(resp.status_code, _error_detail(resp))

        try:
            return resp.json()
        except ValueError as e:
            raise ApiError(resp.status_code, "invalid JSON response shape") from e


def _error_detail(resp: httpx.Response) -> str:
    try:
        detail = resp.json().get("detail")
    except (ValueError, AttributeError):
        detail = None
    if detail is None:
        return resp.text or "<no body>"
    if isinstance(detail, list):
        # FastAPI validation errors: [{"loc": [...], "msg": "..."}, ...]
        return "; ".join(str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail)
    return str(detail)
