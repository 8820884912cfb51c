"""
The Grid is the authoritative store of which piece stands where.

It implements no game rules: it only answers occupancy questions and keeps track of which cells are activated
(offered as destinations to the presentation layer).
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Self

from src.core.exceptions import OutOfBoundsError
from src.engine.pieces import Piece, Position, Team

# Board is 8x8 by default. Size is taken from the BoardConfig though, so nothing below should assume 8.
DEFAULT_BOARD_SIZE = 8


@dataclass
class Cell:
    """The occupancy slot of a single coordinate. Activation is independent of occupancy."""

    piece: Optional[Piece] = None
    active: bool = False


@dataclass
class Grid:
    size: int = DEFAULT_BOARD_SIZE
    cells: list[list[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[Cell() for _ in range(self.size)] for _ in range(self.size)]

    @classmethod
    def empty(cls, size: int = DEFAULT_BOARD_SIZE) -> Self:
        return cls(size)

    # --- OCCUPANCY ---
    def is_on_board(self, position: Position) -> bool:
        row, col = position
        return (0 <= row < self.size) and (0 <= col < self.size)

    def piece_at(self, position: Position) -> Optional[Piece]:
        return self._cell(position).piece

    def set_piece_at(self, position: Position, piece: Optional[Piece]) -> None:
        """Overwrite the occupancy. No legality checks: callers only write destinations produced by the move generator (or clear cells)."""
        self._cell(position).piece = piece

    def clear_position(self, position: Position) -> None:
        self.set_piece_at(position, None)

    def is_empty(self, position: Position) -> bool:
        return self.piece_at(position) is None

    def is_enemy(self, position: Position, team: Team) -> bool:
        piece = self.piece_at(position)
        return piece is not None and piece.team != team

    def place_piece(self, piece: Piece) -> None:
        """Put a piece on the cell matching its own position (used during setup)."""
        self.set_piece_at(piece.position, piece)

    # --- ACTIVATION ---
    def is_active(self, position: Position) -> bool:
        return self._cell(position).active

    def activate(self, position: Position) -> None:
        self._cell(position).active = True

    def deactivate_all(self) -> None:
        """Safe to call repeatedly: cells are set inactive, not toggled."""
        for _, cell in self._iter_cells():
            cell.active = False

    def active_positions(self) -> list[Position]:
        return [position for position, cell in self._iter_cells() if cell.active]

    # --- LOOKUPS (row-major order) ---
    def pieces(self) -> list[Piece]:
        return [cell.piece for _, cell in self._iter_cells() if cell.piece is not None]

    def locate_team(self, team: Team) -> list[Position]:
        return [
            position
            for position, cell in self._iter_cells()
            if cell.piece is not None and cell.piece.team == team
        ]

    def selectable_targets(self, team: Team) -> list[Position]:
        """Positions the presentation layer should accept input on: activated cells, and cells holding a piece of `team`."""
        return [
            position
            for position, cell in self._iter_cells()
            if cell.active or (cell.piece is not None and cell.piece.team == team)
        ]

    # --- helpers ---
    def _cell(self, position: Position) -> Cell:
        if not self.is_on_board(position):
            raise OutOfBoundsError(
                f"Position {position} is not on the board (size {self.size}x{self.size})."
            )
        row, col = position
        return self.cells[row][col]

    def _iter_cells(self) -> Iterator[tuple[Position, Cell]]:
        for row, cells in enumerate(self.cells):
            for col, cell in enumerate(cells):
                yield (row, col), cell
