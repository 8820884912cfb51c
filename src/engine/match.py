"""
A Match wraps a Game with the bookkeeping of who is playing: registered players and the status of the match.

It is the entrypoint into the engine for the service layer, and knows how to convert itself to / from the GameModel
that travels between the layers.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from src.core.exceptions import GameStateError, NotYourTurnError
from src.core.models import GameModel
from src.engine.game import Game, MoveRecord
from src.engine.layout import BoardConfig
from src.engine.pieces import Position, Team

logger = logging.getLogger(__name__)

AVAILABLE_TEAM_NAMES = {team.name.lower(): team for team in Team}


class Status(Enum):
    WAITING_FOR_PLAYERS = auto()
    IN_PROGRESS = auto()
    FINISHED = auto()


def team_from_name(name: str) -> Team:
    if name.lower() not in AVAILABLE_TEAM_NAMES:
        raise GameStateError(
            f"Unknown team {name!r}. Pick one from {','.join(AVAILABLE_TEAM_NAMES)}."
        )
    return AVAILABLE_TEAM_NAMES[name.lower()]


def team_to_name(team: Team) -> str:
    return team.name.lower()


@dataclass
class Match:
    game: Game
    history: list[str]  # position states (no selection), before every committed move
    players: dict[Team, str]
    status: Status

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Match from the information the Service layer actually has"""
        status_name = model.status.replace(" ", "_").upper()
        if status_name not in Status.__members__:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join([status.name.lower() for status in Status])}"
            )

        game = Game.from_state(model.current_state)
        game.moves = [MoveRecord.from_code(code) for code in model.moves]
        players = {
            team_from_name(name): player
            for name, player in model.registered_players.items()
        }
        return cls(game, list(model.history_states), players, Status[status_name])

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            current_state=self.game.to_state(),
            history_states=list(self.history),
            moves=[move.to_code() for move in self.game.moves],
            registered_players={
                team_to_name(team): player for team, player in self.players.items()
            },
            status=self.status.name.lower().replace("_", " "),
        )

    @classmethod
    def new_match(
        cls,
        player: str,
        team: str,
        config: Optional[BoardConfig] = None,
        starting_state: Optional[str] = None,
    ) -> Self:
        """
        To start a new match with the player controlling the indicated team.

        Either from the starting layout of the configuration, or from a custom state (notation as in Game.from_state)
        """
        player_team = team_from_name(team)
        game = (
            Game.from_state(starting_state)
            if starting_state
            else Game.new_game(config)
        )
        return cls(
            game=game,
            history=[],
            players={player_team: player},
            status=Status.WAITING_FOR_PLAYERS,
        )

    @property
    def winner(self) -> Optional[str]:
        if self.status != Status.FINISHED:
            return None
        winning_team = self.game.winner
        return self.players.get(winning_team) if winning_team is not None else None

    @property
    def starting_state(self) -> str:
        """The position the match started from. Before the first move, that is the current position."""
        return self.history[0] if self.history else self.game.position_state()

    def register_player(self, player: str) -> None:
        """Registering the 2nd player to an open match"""
        if self.status != Status.WAITING_FOR_PLAYERS:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {self.status}"
            )
        if player in self.players.values():
            raise GameStateError(f"Player {player!r} already joined this game.")

        opponent_team = next(iter(self.players))
        self.players[opponent_team.opponent] = player
        self.status = Status.IN_PROGRESS
        logger.info("%s joined as team %s", player, opponent_team.opponent.value)
        # a custom starting state can already be decided
        self._check_for_winner()

    def targets(self, player: str) -> list[Position]:
        """Positions the player can currently click on. Empty while waiting for the opponent."""
        self._assert_in_progress()
        if self._get_player_team(player) != self.game.turn:
            return []
        return self.game.clickable_positions()

    def select(self, player: str, position: Position) -> list[Position]:
        """Select the piece on `position`. Returns the offered destinations."""
        self._assert_in_progress()
        self._assert_your_turn(player)
        return self.game.select_at(position)

    def move(self, player: str, destination: Position) -> MoveRecord:
        """Commit a move of the selected piece, and check if that ended the match."""
        self._assert_in_progress()
        self._assert_your_turn(player)

        position_before = self.game.position_state()
        record = self.game.commit_move(destination)
        self.history.append(position_before)
        self._check_for_winner()
        return record

    # -- PRIVATE HELPERS ---
    def _check_for_winner(self) -> None:
        if self.game.winner is not None:
            self.status = Status.FINISHED
            logger.info("team %s won the match", self.game.winner.value)

    def _get_player_team(self, player: str) -> Team:
        for team, name in self.players.items():
            if name == player:
                return team
        raise GameStateError(f"Player {player!r} is not registered for this game.")

    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _assert_your_turn(self, player: str) -> None:
        """You must wait for your turn before selecting / moving."""
        if self._get_player_team(player) != self.game.turn:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {self.players[self.game.turn]} to make a move first."
            )
