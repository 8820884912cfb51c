"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from uuid import UUID

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
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Status, TeamName
from src.db.repository import GameRepository
from src.engine.layout import position_from_notation, position_to_notation
from src.engine.match import Match, team_to_name

logger = logging.getLogger(__name__)


class GameService:
    """Orchestration of layers for the hybrid board game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game."""

        # Use info in CreateGameRequest to create a new Match, and convert into GameModel
        new_match = Match.new_match(
            player=request.player_name,
            team=request.team,
            starting_state=request.starting_state,
        )
        created_game_data = new_match.to_model()

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(created_game_data)
        logger.info("game %s created by %s", game_id, request.player_name)

        # Return a GameResponse
        return self._create_game_response(game_id, stored_game)

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Second player requested to join a game."""

        # Retrieve persisted GameModel and rebuild the Match
        match = Match.from_model(self._fetch_game(request.game_id))

        # Register the requested player
        match.register_player(request.player_name)

        # Capture updated state in GameModel and store in repository
        with_player_registered = match.to_model()
        self.repo.update_game(request.game_id, with_player_registered)

        return self._create_game_response(request.game_id, with_player_registered)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def selectable_targets(self, request: TargetsRequest) -> TargetsResponse:
        """Positions the player can click on right now (own pieces and offered destinations)."""
        match = Match.from_model(self._fetch_game(request.game_id))
        targets = match.targets(request.player_name)
        return TargetsResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            targets=[position_to_notation(position) for position in targets],
        )

    def select_piece(self, request: SelectPieceRequest) -> SelectionResponse:
        """Select a piece. The selection is stored, so the follow-up move request knows which piece moves."""
        match = Match.from_model(self._fetch_game(request.game_id))

        destinations = match.select(
            request.player_name, position_from_notation(request.position)
        )
        self.repo.update_game(request.game_id, match.to_model())

        return SelectionResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            position=request.position,
            destinations=[position_to_notation(position) for position in destinations],
        )

    def commit_move(self, request: MoveRequest) -> GameResponse:
        """Move the selected piece."""
        match = Match.from_model(self._fetch_game(request.game_id))

        record = match.move(request.player_name, position_from_notation(request.to_position))
        logger.info("game %s: %s played %s", request.game_id, request.player_name, record.to_code())

        after_move = match.to_model()
        self.repo.update_game(request.game_id, after_move)
        return self._create_game_response(request.game_id, after_move)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with {request.game_id=} not found.")

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""

        match = Match.from_model(model)
        return GameResponse(
            game_id=game_id,
            players=model.registered_players,
            state=model.current_state,
            starting_state=match.starting_state,
            move_history=model.moves,
            status=Status(model.status),
            turn=TeamName(team_to_name(match.game.turn)),
            winner=match.winner,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
