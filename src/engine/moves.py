"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern. Every delta kind has its own policy function, and a single interpreter walks a piece's
delta table and asks the matching policy which destinations it yields.

Checkers do not fit that vocabulary (a capture looks two cells ahead along the diagonal), so they get their own generator.
"""

from typing import Callable, Protocol

from src.engine.pieces import Delta, DeltaKind, Piece, PieceKind, Position, Team


class Grid(Protocol):
    """Just the parts the movement strategies need"""

    def is_on_board(self, position: Position) -> bool: ...
    def piece_at(self, position: Position) -> Piece | None: ...
    def is_empty(self, position: Position) -> bool: ...
    def is_enemy(self, position: Position, team: Team) -> bool: ...


def offset(position: Position, delta: Delta) -> Position:
    row, col = position
    return (row + delta.row_offset, col + delta.col_offset)


def sign(value: int) -> int:
    return (value > 0) - (value < 0)


# --- MOVEMENT RULES (one per delta kind) ---
def slide_moves(piece: Piece, delta: Delta, grid: Grid) -> list[Position]:
    """
    Raycasting
    -----

    Walk along the delta until we hit another piece or the edge of the board.
    Every empty cell on the way is a destination, and so is the first enemy found (capture). A friendly piece blocks.
    """
    moves: list[Position] = []
    target = offset(piece.position, delta)
    while grid.is_on_board(target):
        if grid.is_empty(target):
            moves.append(target)
            target = offset(target, delta)
            continue

        # only the first occupied cell matters: it can be captured if it's the opponent's
        if grid.is_enemy(target, piece.team):
            moves.append(target)
        break
    return moves


def step_moves(piece: Piece, delta: Delta, grid: Grid) -> list[Position]:
    """A single step: move onto an empty cell or capture, but never land on your own piece."""
    target = offset(piece.position, delta)
    if not grid.is_on_board(target):
        return []
    if grid.is_empty(target) or grid.is_enemy(target, piece.team):
        return [target]
    return []


def attack_only_moves(piece: Piece, delta: Delta, grid: Grid) -> list[Position]:
    """Only allowed when taking a piece (the pawn's diagonal)"""
    target = offset(piece.position, delta)
    if grid.is_on_board(target) and grid.is_enemy(target, piece.team):
        return [target]
    return []


def empty_only_moves(piece: Piece, delta: Delta, grid: Grid) -> list[Position]:
    """
    Only allowed onto an empty cell (the pawn push).

    An unmoved pawn may push two cells, but only if the first cell was free as well.
    """
    target = offset(piece.position, delta)
    if not (grid.is_on_board(target) and grid.is_empty(target)):
        return []

    moves = [target]
    if piece.kind == PieceKind.PAWN and not piece.has_moved:
        double_step = offset(target, delta)
        if grid.is_on_board(double_step) and grid.is_empty(double_step):
            moves.append(double_step)
    return moves


# -- STRATEGY PATTERN: MOVEMENT RULES ---
DeltaRuleFn = Callable[[Piece, Delta, Grid], list[Position]]
MOVEMENT_RULES: dict[DeltaKind, DeltaRuleFn] = {
    DeltaKind.SLIDE: slide_moves,
    DeltaKind.STEP: step_moves,
    DeltaKind.ATTACK_ONLY: attack_only_moves,
    DeltaKind.EMPTY_ONLY_WITH_DOUBLE: empty_only_moves,
}


def delta_moves(piece: Piece, grid: Grid) -> list[Position]:
    """Interpret the full delta table of a (chess-style) piece."""
    moves: list[Position] = []
    for delta in piece.deltas:
        movement_rule = MOVEMENT_RULES[delta.kind]
        moves.extend(movement_rule(piece, delta, grid))
    return moves


# --- CHECKERS ---
def checker_moves(piece: Piece, grid: Grid, attack_only: bool = False) -> list[Position]:
    """
    Checkers move one cell diagonally forward onto an empty cell,
    or hop over an adjacent enemy onto the empty cell right behind it (capture).
    """
    moves: list[Position] = []
    for delta in piece.deltas:
        adjacent = offset(piece.position, delta)
        if not grid.is_on_board(adjacent):
            continue

        if grid.is_empty(adjacent):
            if not attack_only:
                moves.append(adjacent)
            continue

        if grid.is_enemy(adjacent, piece.team):
            landing = offset(adjacent, delta)
            if grid.is_on_board(landing) and grid.is_empty(landing):
                moves.append(landing)
    return moves


def legal_moves(piece: Piece, grid: Grid, attack_only: bool = False) -> list[Position]:
    """
    All destinations of a piece on the current grid
    ----

    ----
    attack_only: keep the capturing moves only (used to check if a checker can continue its chain).
    """
    if piece.is_checker:
        return checker_moves(piece, grid, attack_only=attack_only)

    moves = delta_moves(piece, grid)
    if attack_only:
        return [target for target in moves if grid.is_enemy(target, piece.team)]
    return moves


def attack_position(piece: Piece, origin: Position, destination: Position) -> Position:
    """
    The cell whose occupant gets captured by moving from origin to destination.

    For checkers, the cell that was hopped over (one step back from the destination, along the direction of the move).
    For chess pieces this is the destination itself.
    """
    if not piece.is_checker:
        return destination

    row, col = destination
    return (row - sign(row - origin[0]), col - sign(col - origin[1]))
