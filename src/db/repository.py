"""What the service needs from persistence. SQLAlchemy version in sql_repository.py, the service tests use an in-memory dict."""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    def get_game(self, game_id: UUID) -> GameModel | None:
        """None when no game has this id."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a new game, returns what was stored and the generated id."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Replace the stored match state. None when no game has this id."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Returns the deleted game, None when no game has this id."""
        ...
