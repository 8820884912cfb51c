"""
Defines the pieces of both families (chess-style and checkers-style).

Key idea: a piece is plain data. What it can do is fully described by its (immutable) delta table.
The move generator (see moves.py) interprets those tables.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Self

Position = tuple[int, int]


class Team(IntEnum):
    ONE = 1
    TWO = 2

    @property
    def opponent(self) -> "Team":
        return Team.TWO if self == Team.ONE else Team.ONE

    @property
    def forward(self) -> int:
        """Row direction of 'forward'. Team 1 starts at the bottom rows and moves up the board (decreasing row)."""
        return -1 if self == Team.ONE else 1


class PieceKind(Enum):
    PAWN = auto()
    ROOK = auto()
    BISHOP = auto()
    QUEEN = auto()
    KING = auto()
    KNIGHT = auto()
    CHECKER = auto()


class DeltaKind(Enum):
    SLIDE = auto()
    STEP = auto()
    ATTACK_ONLY = auto()
    EMPTY_ONLY_WITH_DOUBLE = auto()


@dataclass(frozen=True)
class Delta:
    row_offset: int
    col_offset: int
    kind: DeltaKind


def _deltas(offsets: list[tuple[int, int]], kind: DeltaKind) -> tuple[Delta, ...]:
    return tuple(Delta(dr, dc, kind) for dr, dc in offsets)


STRAIGHTS = [(1, 0), (0, 1), (-1, 0), (0, -1)]
DIAGONALS = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
L_SHAPES = [(2, 1), (2, -1), (-2, 1), (-2, -1), (1, 2), (1, -2), (-1, 2), (-1, -2)]

# Written for team 1 (forward = decreasing row). Team 2 uses the row-mirrored table.
DELTA_TABLES: dict[PieceKind, tuple[Delta, ...]] = {
    PieceKind.PAWN: (
        Delta(-1, 0, DeltaKind.EMPTY_ONLY_WITH_DOUBLE),
        Delta(-1, -1, DeltaKind.ATTACK_ONLY),
        Delta(-1, 1, DeltaKind.ATTACK_ONLY),
    ),
    PieceKind.ROOK: _deltas(STRAIGHTS, DeltaKind.SLIDE),
    PieceKind.BISHOP: _deltas(DIAGONALS, DeltaKind.SLIDE),
    PieceKind.QUEEN: _deltas(DIAGONALS + STRAIGHTS, DeltaKind.SLIDE),
    PieceKind.KING: _deltas(DIAGONALS + STRAIGHTS, DeltaKind.STEP),
    # NOTE: a single unblocked step per L-shape, no intermediate squares are inspected
    PieceKind.KNIGHT: _deltas(L_SHAPES, DeltaKind.STEP),
    PieceKind.CHECKER: _deltas([(-1, 1), (-1, -1)], DeltaKind.STEP),
}


def delta_table(kind: PieceKind, team: Team) -> tuple[Delta, ...]:
    """The delta table of a piece kind, oriented towards the team's forward direction."""
    table = DELTA_TABLES[kind]
    if team == Team.ONE:
        return table
    return tuple(Delta(-delta.row_offset, delta.col_offset, delta.kind) for delta in table)


NOTATION_TO_KIND: dict[str, PieceKind] = {
    "p": PieceKind.PAWN,
    "r": PieceKind.ROOK,
    "b": PieceKind.BISHOP,
    "q": PieceKind.QUEEN,
    "k": PieceKind.KING,
    "n": PieceKind.KNIGHT,
    "c": PieceKind.CHECKER,
}

KIND_TO_NOTATION: dict[PieceKind, str] = {
    value: key for key, value in NOTATION_TO_KIND.items()
}


@dataclass(eq=False, repr=False)
class Piece:
    """
    A piece on the board. Compared by identity: two pawns of the same team are still two different pieces.

    NOTE: `position` must always equal the coordinate of the cell holding the piece. The Game keeps this in sync on every move.
    """

    kind: PieceKind
    team: Team
    position: Position
    has_moved: bool = False
    deltas: tuple[Delta, ...] = field(init=False)

    def __post_init__(self) -> None:
        self.deltas = delta_table(self.kind, self.team)

    @classmethod
    def from_notation(cls, character: str, position: Position) -> Self:
        # upper case: team 1, lower case: team 2
        team = Team.ONE if character.isupper() else Team.TWO
        kind = NOTATION_TO_KIND[character.lower()]
        return cls(kind, team, position)

    def to_notation(self) -> str:
        character = KIND_TO_NOTATION[self.kind]
        return character.upper() if self.team == Team.ONE else character

    @property
    def is_checker(self) -> bool:
        return self.kind == PieceKind.CHECKER

    def move_to(self, position: Position) -> None:
        self.position = position
        self.has_moved = True

    def __repr__(self) -> str:
        return f"Piece({self.kind.name}, team={self.team.value}, position={self.position})"
