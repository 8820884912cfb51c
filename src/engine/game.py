"""
The Game is the turn & capture resolver: the entrypoint into the engine for whatever layer handles user input.

It is responsible for orchestrating a turn:
select a piece -> offer its moves (activated cells) -> commit one of them -> resolve captures -> decide who plays next.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Self

from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    InvalidLayoutError,
    NoSelectionError,
    NotYourTurnError,
    OutOfBoundsError,
)
from src.engine.grid import Grid
from src.engine.layout import (
    BoardConfig,
    build_grid,
    layout_to_notation,
    parse_layout,
    position_from_notation,
    position_to_notation,
)
from src.engine.moves import attack_position, legal_moves
from src.engine.pieces import Piece, Position, Team

logger = logging.getLogger(__name__)

NO_POSITION = "-"
CAPTURE_MARKER = "x"


class Phase(Enum):
    """Values are used in the state notation."""

    NO_SELECTION = "-"
    PIECE_SELECTED = "s"
    MUST_CONTINUE_CAPTURE = "x"


@dataclass(frozen=True)
class MoveRecord:
    """A committed move. `captured_at` is the attack position, if a piece got taken."""

    origin: Position
    destination: Position
    captured_at: Optional[Position] = None

    @classmethod
    def from_code(cls, code: str) -> Self:
        """
        '2,2:4,4x3,3' : moved from (2,2) to (4,4) and took the piece on (3,3)
        '6,3:4,3'     : moved from (6,3) to (4,3), no capture
        """
        move_part, _, captured_part = code.partition(CAPTURE_MARKER)
        origin, separator, destination = move_part.partition(":")
        if not separator:
            raise InvalidLayoutError(f"Cannot interpret {code!r} as a move.")
        captured_at = position_from_notation(captured_part) if captured_part else None
        return cls(
            position_from_notation(origin),
            position_from_notation(destination),
            captured_at,
        )

    def to_code(self) -> str:
        code = f"{position_to_notation(self.origin)}:{position_to_notation(self.destination)}"
        if self.captured_at is not None:
            code += f"{CAPTURE_MARKER}{position_to_notation(self.captured_at)}"
        return code

    @property
    def is_capture(self) -> bool:
        return self.captured_at is not None


@dataclass
class Game:
    grid: Grid
    turn: Team
    phase: Phase = Phase.NO_SELECTION
    selected: Optional[Piece] = None
    legal_destinations: list[Position] = field(default_factory=list)
    moves: list[MoveRecord] = field(default_factory=list)

    @classmethod
    def new_game(cls, config: Optional[BoardConfig] = None) -> Self:
        config = config or BoardConfig()
        return cls(grid=build_grid(config), turn=config.starting_team)

    @classmethod
    def from_state(cls, state: str, size: Optional[int] = None) -> Self:
        """
        Restore a game from its state notation
        ----

        <layout> <turn owner> <phase> <selected position>

        ex) in the opening position, the checkers (team 2) to move, nothing selected:
        c1c1c1c1/1c1c1c1c/c1c1c1c1/8/8/8/PPPPPPPP/RNBKQBNR 2 - -

        The activated cells are not stored: they follow from the selection and the phase.
        Without an explicit `size`, the board size is the number of rows in the layout.
        """
        parts = state.split(" ")
        if len(parts) != 4:
            raise InvalidLayoutError(
                f"State {state!r} must contain 4 space-separated parts."
            )
        layout, turn_str, phase_str, selected_str = parts

        grid = parse_layout(layout, size or len(layout.split("/")))
        try:
            turn = Team(int(turn_str))
            phase = Phase(phase_str)
        except ValueError as e:
            raise InvalidLayoutError(f"Invalid turn or phase in state {state!r}.") from e

        game = cls(grid=grid, turn=turn)
        if phase == Phase.NO_SELECTION:
            if selected_str != NO_POSITION:
                raise InvalidLayoutError("A selection requires a phase other than '-'.")
            return game

        selected = None
        if selected_str != NO_POSITION:
            position = position_from_notation(selected_str)
            selected = grid.piece_at(position) if grid.is_on_board(position) else None
        if selected is None or selected.team != turn:
            raise InvalidLayoutError(
                f"Phase {phase_str!r} requires a selected piece of team {turn.value}."
            )
        game.selected = selected
        game.phase = phase
        game._show_moves(
            legal_moves(
                selected, grid, attack_only=(phase == Phase.MUST_CONTINUE_CAPTURE)
            )
        )
        return game

    def to_state(self) -> str:
        selected = (
            position_to_notation(self.selected.position)
            if self.selected is not None
            else NO_POSITION
        )
        return f"{layout_to_notation(self.grid)} {self.turn.value} {self.phase.value} {selected}"

    def position_state(self) -> str:
        """State notation of the position only: who is to move on which board, without a selection in progress."""
        return f"{layout_to_notation(self.grid)} {self.turn.value} {Phase.NO_SELECTION.value} {NO_POSITION}"

    # --- READ ACCESSORS ---
    def piece_at(self, position: Position) -> Optional[Piece]:
        return self.grid.piece_at(position)

    def is_on_board(self, position: Position) -> bool:
        return self.grid.is_on_board(position)

    def selectable_targets(self, team: Team) -> list[Position]:
        return self.grid.selectable_targets(team)

    def clickable_positions(self) -> list[Position]:
        """During a chain capture only the offered hops accept input, no piece can be (re)selected."""
        if self.phase == Phase.MUST_CONTINUE_CAPTURE:
            return self.grid.active_positions()
        return self.grid.selectable_targets(self.turn)

    @property
    def winner(self) -> Optional[Team]:
        """A team wins once the other team has no pieces left on the board."""
        for team in Team:
            if not self.grid.locate_team(team):
                return team.opponent
        return None

    # --- MUTATIONS ---
    def select_piece(self, piece: Piece) -> list[Position]:
        """
        Select a piece of the team on turn and offer its moves.

        Selecting another piece while one is already selected simply replaces the selection.
        Not possible in the middle of a chain capture: that piece has to finish its chain.
        """
        if self.phase == Phase.MUST_CONTINUE_CAPTURE:
            raise GameStateError(
                f"{self.selected} must continue capturing. Cannot select another piece."
            )
        if piece.team != self.turn:
            raise NotYourTurnError(
                f"It is not team {piece.team.value}'s turn. Waiting for team {self.turn.value}."
            )
        if not self._is_on_grid(piece):
            raise GameStateError(f"{piece} is not on the board.")

        self.selected = piece
        self.phase = Phase.PIECE_SELECTED
        moves = legal_moves(piece, self.grid)
        self._show_moves(moves)
        return moves

    def select_at(self, position: Position) -> list[Position]:
        """Convenience for the outer layers, that only know coordinates."""
        piece = self.grid.piece_at(position)
        if piece is None:
            raise GameStateError(f"There is no piece on {position} to select.")
        return self.select_piece(piece)

    def clear_selection(self) -> None:
        if self.phase == Phase.MUST_CONTINUE_CAPTURE:
            raise GameStateError(
                f"{self.selected} must continue capturing. Cannot drop the selection."
            )
        self._reset_selection()

    def commit_move(self, destination: Position) -> MoveRecord:
        """
        Move the selected piece to one of its offered destinations
        -----

        1. clear the old cell
        2. find the attack position (the hopped-over cell for checkers, the destination for chess pieces)
        3. take the piece on the attack position, if any
        4. place the piece on its destination
        5. clear all activated cells
        6. a checker that just captured and can capture again keeps the turn, otherwise the turn passes to the opponent
        """
        piece = self.selected
        if piece is None:
            raise NoSelectionError("A piece is not selected.")
        if not self.grid.is_on_board(destination):
            raise OutOfBoundsError(f"Position {destination} is not on the board.")
        if destination not in self.legal_destinations:
            raise IllegalMoveError(
                f"{piece} cannot move to {destination}. Options: {self.legal_destinations}"
            )

        origin = piece.position
        self.grid.clear_position(origin)

        attacked = attack_position(piece, origin, destination)
        captured = self.grid.piece_at(attacked)
        if captured is not None:
            self.grid.clear_position(attacked)
            logger.info("%s captured %s", piece, captured)

        self.grid.set_piece_at(destination, piece)
        piece.move_to(destination)
        self.grid.deactivate_all()

        record = MoveRecord(
            origin, destination, attacked if captured is not None else None
        )
        self.moves.append(record)
        logger.debug("committed move %s", record.to_code())

        if captured is not None and piece.is_checker:
            follow_ups = legal_moves(piece, self.grid, attack_only=True)
            if follow_ups:
                self._show_moves(follow_ups)
                self.phase = Phase.MUST_CONTINUE_CAPTURE
                logger.info("%s must continue capturing: %s", piece, follow_ups)
                return record

        self._end_turn()
        return record

    # -- PRIVATE HELPERS ---
    def _show_moves(self, moves: list[Position]) -> None:
        self.grid.deactivate_all()
        for target in moves:
            self.grid.activate(target)
        self.legal_destinations = list(moves)

    def _reset_selection(self) -> None:
        self.selected = None
        self.phase = Phase.NO_SELECTION
        self.legal_destinations = []
        self.grid.deactivate_all()

    def _end_turn(self) -> None:
        self._reset_selection()
        self.turn = self.turn.opponent

    def _is_on_grid(self, piece: Piece) -> bool:
        return (
            self.grid.is_on_board(piece.position)
            and self.grid.piece_at(piece.position) is piece
        )
