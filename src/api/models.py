"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Status, TeamName

TeamKey = str
PlayerName = str


def _is_position_notation(value: str) -> bool:
    """'row,col' with two (non-negative) integers"""
    parts = value.split(",")
    return len(parts) == 2 and all(part.strip().isdigit() for part in parts)


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_name: str
    team: TeamName
    starting_state: Optional[str] = None

    @field_validator("starting_state")
    @classmethod
    def validate_starting_state(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        parts = value.strip().split(" ")
        if len(parts) != 4:
            raise InvalidRequestError(
                "Board state must contain 4 space-separated parts: <layout> <turn> <phase> <selected>."
            )
        return value.strip()


class JoinGameRequest(BaseModel):
    game_id: UUID
    player_name: str


class GetGameRequest(BaseModel):
    game_id: UUID


class TargetsRequest(BaseModel):
    game_id: UUID
    player_name: str


class SelectPieceRequest(BaseModel):
    game_id: UUID
    player_name: str
    position: str

    @field_validator("position")
    @classmethod
    def validate_position(cls, value: str) -> str:
        if not _is_position_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret position: {value!r} as 'row,col'."
            )
        return value


class MoveRequest(BaseModel):
    game_id: UUID
    player_name: str
    to_position: str

    @field_validator("to_position")
    @classmethod
    def validate_position(cls, value: str) -> str:
        if not _is_position_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret to_position: {value!r} as 'row,col'."
            )
        return value


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    players: dict[TeamKey, PlayerName]
    state: str
    starting_state: str
    move_history: list[str]
    status: Status
    turn: TeamName
    winner: Optional[PlayerName] = None


class SelectionResponse(BaseModel):
    game_id: UUID
    player_name: str
    position: str
    destinations: list[str]


class TargetsResponse(BaseModel):
    game_id: UUID
    player_name: str
    targets: list[str]
