from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tictactoe.core.exceptions import (
    ConflictError,
    GameNotFoundError,
    InvalidMoveError,
    InvalidStateError,
    NoLegalMoveError,
    TicTacToeError,
    UnauthorizedError,
)
from tictactoe.services import GameSessionStore
from tictactoe.settings import get_server_settings
from .schemas import (
    CreatePvpGameRequest,
    CreateSoloGameRequest,
    ErrorResponse,
    GameResponse,
    JoinPvpGameRequest,
    PlayMoveRequest,
)

logger = logging.getLogger(__name__)

# Checked in order; the first matching class wins.
ERROR_STATUS_CODES = {
    NoLegalMoveError: 500,
    GameNotFoundError: 404,
    InvalidStateError: 400,
    InvalidMoveError: 400,
    ConflictError: 409,
    UnauthorizedError: 401,
}

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log application startup and shutdown."""
    logger.info("Starting tic-tac-toe server (in-memory sessions)")
    yield
    logger.info(f"Shutting down; {len(store.repo)} game(s) discarded")


settings = get_server_settings()

app = FastAPI(
    title="Tic-Tac-Toe Arena Server",
    version="0.1.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

store = GameSessionStore()


# ---- Dependencies ----
def get_store() -> GameSessionStore:
    return store


@app.exception_handler(TicTacToeError)
async def handle_game_error(request: Request, exc: TicTacToeError) -> JSONResponse:
    status_code = next(
        (code for error_cls, code in ERROR_STATUS_CODES.items() if isinstance(exc, error_cls)),
        500,
    )
    if status_code >= 500:
        logger.error(f"Invariant violation on {request.url.path}: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/games/solo", response_model=GameResponse, status_code=201)
def create_solo_game(req: CreateSoloGameRequest, service: GameSessionStore = Depends(get_store)):
    return service.create_solo(str(req.player_id), req.client_name)


@app.post("/games/pvp", response_model=GameResponse, status_code=201)
def create_pvp_game(req: CreatePvpGameRequest, service: GameSessionStore = Depends(get_store)):
    return service.create_pvp(str(req.player_id), req.name, req.password)


@app.get("/games/pvp/open", response_model=List[GameResponse])
def list_open_pvp_games(service: GameSessionStore = Depends(get_store)):
    return service.list_open_pvp()


@app.post("/games/pvp/{game_id}/join", response_model=GameResponse, responses=ERROR_RESPONSES)
def join_pvp_game(game_id: str, req: JoinPvpGameRequest, service: GameSessionStore = Depends(get_store)):
    return service.join_pvp(game_id, str(req.player_id), req.password)


@app.get("/games/{game_id}", response_model=GameResponse, responses=ERROR_RESPONSES)
def get_game(game_id: str, service: GameSessionStore = Depends(get_store)):
    return service.get_session(game_id)


@app.post("/games/{game_id}/move", response_model=GameResponse, responses=ERROR_RESPONSES)
def play_move(game_id: str, req: PlayMoveRequest, service: GameSessionStore = Depends(get_store)):
    return service.play_move(game_id, str(req.player_id), req.index)


def main() -> None:
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "server.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
