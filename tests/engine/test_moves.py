"""Unit tests for /src/engine/moves.py"""

import pytest

from src.engine.layout import STANDARD_LAYOUT, parse_layout
from src.engine.moves import (
    MOVEMENT_RULES,
    attack_only_moves,
    attack_position,
    checker_moves,
    delta_moves,
    empty_only_moves,
    legal_moves,
    slide_moves,
    step_moves,
)
from src.engine.pieces import Delta, DeltaKind, Piece, PieceKind, Team


def test_every_delta_kind_has_a_rule() -> None:
    assert set(MOVEMENT_RULES.keys()) == set(DeltaKind)


# --- SLIDE ---
def test_slide_stops_at_first_enemy(grid_with) -> None:
    """Rook on (7,7), enemy on (7,3): the enemy is the last cell offered, (7,2) is never reached"""
    grid = grid_with({(7, 7): "R", (7, 3): "c"})
    rook = grid.piece_at((7, 7))
    moves = slide_moves(rook, Delta(0, -1, DeltaKind.SLIDE), grid)
    assert moves == [(7, 6), (7, 5), (7, 4), (7, 3)]


def test_rook_moves_with_enemy_on_rank(grid_with) -> None:
    grid = grid_with({(7, 7): "R", (7, 3): "c"})
    moves = legal_moves(grid.piece_at((7, 7)), grid)
    assert set(moves) == {(7, 6), (7, 5), (7, 4), (7, 3)} | {(row, 7) for row in range(7)}
    assert (7, 2) not in moves


def test_slide_w_friendly_blocker(grid_with) -> None:
    """Your own piece blocks and is not offered"""
    grid = grid_with({(7, 7): "R", (7, 3): "P"})
    moves = slide_moves(grid.piece_at((7, 7)), Delta(0, -1, DeltaKind.SLIDE), grid)
    assert moves == [(7, 6), (7, 5), (7, 4)]


def test_slide_on_empty_board(grid_with) -> None:
    """Only restricted by the edges of the board"""
    grid = grid_with({(3, 3): "Q"})
    moves = legal_moves(grid.piece_at((3, 3)), grid)
    # 7 cells along each of the rank and the file, 7 + 6 along the two diagonals
    assert len(moves) == 27
    assert len(set(moves)) == len(moves)


def test_bishop_w_mixed_blockers(grid_with) -> None:
    grid = grid_with({(4, 4): "B", (2, 2): "c", (6, 6): "P", (5, 3): "c"})
    moves = legal_moves(grid.piece_at((4, 4)), grid)
    assert set(moves) == {
        (3, 3), (2, 2),  # up-left: stops on the enemy
        (5, 5),  # down-right: stops before own pawn
        (3, 5), (2, 6), (1, 7),  # up-right: open to the edge
        (5, 3),  # down-left: enemy right away
    }


# --- STEP ---
def test_step_onto_empty_or_enemy(grid_with) -> None:
    grid = grid_with({(4, 4): "K", (3, 4): "c", (5, 4): "P"})
    king = grid.piece_at((4, 4))
    assert step_moves(king, Delta(-1, 0, DeltaKind.STEP), grid) == [(3, 4)]
    assert step_moves(king, Delta(1, 0, DeltaKind.STEP), grid) == []
    assert step_moves(king, Delta(0, 1, DeltaKind.STEP), grid) == [(4, 5)]


def test_step_off_board(grid_with) -> None:
    grid = grid_with({(0, 0): "K"})
    assert step_moves(grid.piece_at((0, 0)), Delta(-1, -1, DeltaKind.STEP), grid) == []


def test_king_in_corner(grid_with) -> None:
    grid = grid_with({(7, 7): "K"})
    assert set(legal_moves(grid.piece_at((7, 7)), grid)) == {(6, 6), (6, 7), (7, 6)}


def test_knight_is_not_blocked(grid_with) -> None:
    """A knight lands on its L-shaped cell no matter what stands in between"""
    grid = parse_layout(STANDARD_LAYOUT)
    knight = grid.piece_at((7, 1))
    assert knight.kind == PieceKind.KNIGHT
    assert set(legal_moves(knight, grid)) == {(5, 0), (5, 2)}


# --- ATTACK ONLY ---
def test_attack_only(grid_with) -> None:
    grid = grid_with({(6, 3): "P", (5, 2): "c", (5, 4): "R"})
    pawn = grid.piece_at((6, 3))
    assert attack_only_moves(pawn, Delta(-1, -1, DeltaKind.ATTACK_ONLY), grid) == [(5, 2)]
    # friendly piece is not a target
    assert attack_only_moves(pawn, Delta(-1, 1, DeltaKind.ATTACK_ONLY), grid) == []
    # neither is an empty cell
    assert attack_only_moves(pawn, Delta(-1, 0, DeltaKind.ATTACK_ONLY), grid) == []


# --- EMPTY ONLY (PAWN PUSH) ---
def test_pawn_double_step_from_start(grid_with) -> None:
    grid = grid_with({(6, 3): "P"})
    pawn = grid.piece_at((6, 3))
    assert legal_moves(pawn, grid) == [(5, 3), (4, 3)]


def test_pawn_single_step_after_moving(grid_with) -> None:
    grid = grid_with({(6, 3): "P"})
    pawn = grid.piece_at((6, 3))
    grid.clear_position((6, 3))
    grid.set_piece_at((4, 3), pawn)
    pawn.move_to((4, 3))
    assert legal_moves(pawn, grid) == [(3, 3)]


def test_pawn_blocked_first_cell_blocks_double_step(grid_with) -> None:
    grid = grid_with({(6, 3): "P", (5, 3): "c"})
    pawn = grid.piece_at((6, 3))
    assert empty_only_moves(pawn, Delta(-1, 0, DeltaKind.EMPTY_ONLY_WITH_DOUBLE), grid) == []
    assert legal_moves(pawn, grid) == []


def test_pawn_blocked_second_cell(grid_with) -> None:
    grid = grid_with({(6, 3): "P", (4, 3): "c"})
    assert legal_moves(grid.piece_at((6, 3)), grid) == [(5, 3)]


def test_pawn_cannot_capture_forward(grid_with) -> None:
    grid = grid_with({(6, 3): "P", (5, 3): "c", (5, 2): "c"})
    assert legal_moves(grid.piece_at((6, 3)), grid) == [(5, 2)]


def test_only_pawns_get_the_double_step(grid_with) -> None:
    """The delta kind is pawn specific in practice, but the double step is tied to the piece kind"""
    grid = grid_with({(6, 3): "K"})
    king = grid.piece_at((6, 3))
    delta = Delta(-1, 0, DeltaKind.EMPTY_ONLY_WITH_DOUBLE)
    assert empty_only_moves(king, delta, grid) == [(5, 3)]


def test_team_two_pawn_moves_down(grid_with) -> None:
    grid = grid_with({(1, 3): "p", (2, 4): "R"})
    assert legal_moves(grid.piece_at((1, 3)), grid) == [(2, 3), (3, 3), (2, 4)]


# --- CHECKERS ---
def test_checker_hop(grid_with) -> None:
    """Checker on (2,2), enemy on (3,3), (4,4) empty: the only capture lands on (4,4)"""
    grid = grid_with({(2, 2): "c", (3, 3): "P"})
    checker = grid.piece_at((2, 2))
    assert checker_moves(checker, grid, attack_only=True) == [(4, 4)]
    assert checker_moves(checker, grid) == [(4, 4), (3, 1)]


def test_checker_plain_moves(grid_with) -> None:
    grid = grid_with({(2, 2): "c"})
    assert checker_moves(grid.piece_at((2, 2)), grid) == [(3, 3), (3, 1)]
    assert checker_moves(grid.piece_at((2, 2)), grid, attack_only=True) == []


def test_checker_hop_needs_empty_landing(grid_with) -> None:
    grid = grid_with({(2, 2): "c", (3, 3): "P", (4, 4): "P"})
    assert checker_moves(grid.piece_at((2, 2)), grid, attack_only=True) == []


def test_checker_hop_off_board(grid_with) -> None:
    grid = grid_with({(6, 6): "c", (7, 7): "R", (7, 5): "R"})
    assert checker_moves(grid.piece_at((6, 6)), grid) == []


def test_checker_blocked_by_own_piece(grid_with) -> None:
    grid = grid_with({(2, 2): "c", (3, 3): "c", (3, 1): "c"})
    assert checker_moves(grid.piece_at((2, 2)), grid) == []


def test_legal_moves_dispatches_checkers(grid_with) -> None:
    grid = grid_with({(2, 2): "c", (3, 3): "P"})
    checker = grid.piece_at((2, 2))
    assert legal_moves(checker, grid) == checker_moves(checker, grid)
    assert legal_moves(checker, grid, attack_only=True) == [(4, 4)]


def test_attack_only_filter_for_chess_pieces(grid_with) -> None:
    grid = grid_with({(7, 7): "R", (7, 3): "c", (2, 7): "c"})
    assert set(legal_moves(grid.piece_at((7, 7)), grid, attack_only=True)) == {(7, 3), (2, 7)}


def test_delta_moves_follow_table_order(grid_with) -> None:
    grid = grid_with({(6, 3): "P", (5, 2): "c", (5, 4): "c"})
    assert delta_moves(grid.piece_at((6, 3)), grid) == [(5, 3), (4, 3), (5, 2), (5, 4)]


# --- ATTACK POSITION ---
@pytest.mark.parametrize(
    "origin, destination, expected",
    [
        ((2, 2), (4, 4), (3, 3)),
        ((2, 6), (4, 4), (3, 5)),
        ((5, 5), (3, 3), (4, 4)),
        # a plain step: the 'attack position' is the cell the checker just left
        ((2, 2), (3, 3), (2, 2)),
    ],
)
def test_attack_position_checker(origin, destination, expected) -> None:
    checker = Piece(PieceKind.CHECKER, Team.TWO, origin)
    assert attack_position(checker, origin, destination) == expected


@pytest.mark.parametrize("kind", [kind for kind in PieceKind if kind != PieceKind.CHECKER])
def test_attack_position_chess_pieces(kind: PieceKind) -> None:
    piece = Piece(kind, Team.ONE, (7, 7))
    assert attack_position(piece, (7, 7), (7, 3)) == (7, 3)


def test_opening_position(grid_with) -> None:
    """Back rank pieces are boxed in by the pawns. Checkers on the front row can step forward."""
    grid = parse_layout(STANDARD_LAYOUT)
    for col in [0, 2, 3, 4, 5, 7]:
        assert legal_moves(grid.piece_at((7, col)), grid) == []
    for col in range(8):
        assert len(legal_moves(grid.piece_at((6, col)), grid)) == 2
    assert checker_moves(grid.piece_at((2, 0)), grid) == [(3, 1)]
    assert checker_moves(grid.piece_at((1, 1)), grid) == []
