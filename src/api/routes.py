"""FastAPI application: thin HTTP wrapper around the GameService."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator
from uuid import UUID

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    MoveRequest,
    SelectionResponse,
    SelectPieceRequest,
    TargetsRequest,
    TargetsResponse,
)
from src.core.config import SETTINGS
from src.core.exceptions import (
    GameError,
    GameStateError,
    IllegalMoveError,
    NoSelectionError,
    NotYourTurnError,
    RepositoryError,
)
from src.db.database import get_db, init_db
from src.db.sql_repository import SQLGameRepository
from src.services.game_service import GameService

logger = logging.getLogger(__name__)

# Anything not listed here is a bad request (400)
ERROR_STATUS_CODES: dict[type[GameError], int] = {
    RepositoryError: 404,
    NotYourTurnError: 409,
    GameStateError: 409,
    NoSelectionError: 409,
    IllegalMoveError: 422,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logging.basicConfig(level=SETTINGS.log_level)
    init_db()
    yield


app = FastAPI(
    title="Hybrid Board API",
    description="Chess pieces versus checkers on one board",
    version="0.1.0",
    lifespan=lifespan,
)


def get_service(db: Session = Depends(get_db)) -> GameService:
    return GameService(SQLGameRepository(db))


@app.exception_handler(GameError)
def handle_game_error(request: Request, exc: GameError) -> JSONResponse:
    status_code = next(
        (code for error, code in ERROR_STATUS_CODES.items() if isinstance(exc, error)),
        400,
    )
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, status_code, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.post("/games", response_model=GameResponse, status_code=201)
def create_game(body: CreateGameRequest, service: GameService = Depends(get_service)):
    """Create a new game. The other team is open for a second player."""
    return service.create_new_game(body)


@app.get("/games/{game_id}", response_model=GameResponse)
def get_game(game_id: UUID, service: GameService = Depends(get_service)):
    return service.get_game_state(GetGameRequest(game_id=game_id))


@app.post("/games/join", response_model=GameResponse)
def join_game(body: JoinGameRequest, service: GameService = Depends(get_service)):
    return service.join_game(body)


@app.get("/games/{game_id}/targets", response_model=TargetsResponse)
def get_targets(
    game_id: UUID, player_name: str, service: GameService = Depends(get_service)
):
    """Positions that currently accept input for this player."""
    return service.selectable_targets(
        TargetsRequest(game_id=game_id, player_name=player_name)
    )


@app.post("/games/select", response_model=SelectionResponse)
def select_piece(body: SelectPieceRequest, service: GameService = Depends(get_service)):
    return service.select_piece(body)


@app.post("/games/move", response_model=GameResponse)
def commit_move(body: MoveRequest, service: GameService = Depends(get_service)):
    return service.commit_move(body)


@app.delete("/games/{game_id}", status_code=204)
def delete_game(game_id: UUID, service: GameService = Depends(get_service)) -> None:
    service.delete_game(DeleteGameRequest(game_id=game_id))
