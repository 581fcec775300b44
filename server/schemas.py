from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(ApiModel):
    # Unknown body fields are rejected instead of silently dropped.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class CreateSoloGameRequest(RequestModel):
    player_id: UUID
    client_name: str


class CreatePvpGameRequest(RequestModel):
    player_id: UUID
    name: str = Field(min_length=3, max_length=40)
    password: Optional[str] = Field(default=None, min_length=3, max_length=32)


class JoinPvpGameRequest(RequestModel):
    player_id: UUID
    password: Optional[str] = Field(default=None, min_length=3, max_length=32)


class PlayMoveRequest(RequestModel):
    player_id: UUID
    index: int = Field(ge=0, le=8, strict=True)


class GameResponse(ApiModel):
    id: str
    mode: Literal["SOLO", "PVP"]
    name: str
    host_player_id: str
    guest_player_id: Optional[str] = None
    board: List[Optional[Literal["X", "O"]]]
    current_turn: Literal["X", "O"]
    status: Literal["WAITING_FOR_PLAYER", "IN_PROGRESS", "WON", "DRAW"]
    winner: Optional[Literal["X", "O"]] = None
    created_at: datetime
    updated_at: datetime
    has_password: bool


class ErrorResponse(BaseModel):
    detail: str
