"""SQLAlchemy implementation of the GameRepository protocol"""

import logging
from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from src.core.models import GameModel
from src.db.schema import DBGame

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Games are rows of the `games` table. Every write is committed right away (one session per request)."""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        record = self.db.get(DBGame, game_id)
        return _to_model(record) if record is not None else None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        record = DBGame(id=uuid4())
        _write(record, game)
        self.db.add(record)
        self._commit(record)
        logger.debug("stored new game %s", record.id)
        return _to_model(record), record.id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        record = self.db.get(DBGame, game_id)
        if record is None:
            return None
        _write(record, game)
        self._commit(record)
        return _to_model(record)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        record = self.db.get(DBGame, game_id)
        if record is None:
            return None
        deleted = _to_model(record)
        self.db.delete(record)
        self.db.commit()
        logger.debug("deleted game %s", game_id)
        return deleted

    def _commit(self, record: DBGame) -> None:
        self.db.commit()
        self.db.refresh(record)


def _write(record: DBGame, game: GameModel) -> None:
    """Copy the model onto the row. JSON columns only notice reassignment, so lists and dicts are copied, never shared."""
    record.current_state = game.current_state
    record.history_states = list(game.history_states)
    record.moves = list(game.moves)
    record.registered_players = dict(game.registered_players)
    record.status = game.status


def _to_model(record: DBGame) -> GameModel:
    return GameModel(
        current_state=record.current_state,
        history_states=list(record.history_states),
        moves=list(record.moves),
        registered_players=dict(record.registered_players),
        status=record.status,
    )
