"""
Board configuration and the layout notation used to store/restore a board.

Layout notation
---

Similar to the board part of a FEN string in chess:
* rows are separated by slashes, and written from row 0 (top, team 2's side) to the last row (bottom, team 1's side)
* a letter is a piece: p(awn), r(ook), b(ishop), q(ueen), k(ing), k(n)ight, c(hecker). Upper case for team 1, lower case for team 2
* a digit is a run of empty cells (1-9, longer runs are written as multiple digits)
* an apostrophe right after a letter means that piece has moved already (pawns need this for the double step)

ex) The standard starting position (checkers on the top three rows, chess pieces on the bottom two):
c1c1c1c1/1c1c1c1c/c1c1c1c1/8/8/8/PPPPPPPP/RNBKQBNR
"""

from dataclasses import dataclass

from src.core.exceptions import InvalidLayoutError
from src.engine.grid import DEFAULT_BOARD_SIZE, Grid
from src.engine.pieces import NOTATION_TO_KIND, Piece, Position, Team

STANDARD_LAYOUT = "c1c1c1c1/1c1c1c1c/c1c1c1c1/8/8/8/PPPPPPPP/RNBKQBNR"
EMPTY_LAYOUT = "/".join(["8"] * 8)
MOVED_MARKER = "'"
MAX_RUN = 9


@dataclass(frozen=True)
class BoardConfig:
    """
    Everything needed to set up a board. Passed into board construction explicitly.

    NOTE: The checkers side (team 2) opens the game by default.
    """

    size: int = DEFAULT_BOARD_SIZE
    starting_layout: str = STANDARD_LAYOUT
    starting_team: Team = Team.TWO

    def __post_init__(self) -> None:
        if self.size < 1:
            raise InvalidLayoutError(f"Board size must be positive, got {self.size}.")
        # parse once, so a broken layout is noticed when configuring and not halfway into a game
        parse_layout(self.starting_layout, self.size)


def build_grid(config: BoardConfig) -> Grid:
    """A fresh grid in the starting position of the configuration"""
    return parse_layout(config.starting_layout, config.size)


def parse_layout(layout: str, size: int = DEFAULT_BOARD_SIZE) -> Grid:
    """Construct a grid from layout notation. Raises InvalidLayoutError if it does not describe a size x size board."""
    rows = layout.split("/")
    if len(rows) != size:
        raise InvalidLayoutError(
            f"Layout {layout!r} has {len(rows)} rows, expected {size}."
        )

    grid = Grid.empty(size)
    for row, row_notation in enumerate(rows):
        col = 0
        last_piece: Piece | None = None
        for character in row_notation:
            if character.isdigit():
                run = int(character)
                if run == 0:
                    raise InvalidLayoutError(f"Row {row}: empty run of length 0.")
                col += run
                last_piece = None
            elif character == MOVED_MARKER:
                if last_piece is None or last_piece.has_moved:
                    raise InvalidLayoutError(
                        f"Row {row}: {MOVED_MARKER!r} must directly follow a piece."
                    )
                last_piece.has_moved = True
            elif character.lower() in NOTATION_TO_KIND:
                if col >= size:
                    raise InvalidLayoutError(f"Row {row} is longer than {size} cells.")
                last_piece = Piece.from_notation(character, (row, col))
                grid.place_piece(last_piece)
                col += 1
            else:
                raise InvalidLayoutError(f"Row {row}: unknown character {character!r}.")

        if col != size:
            raise InvalidLayoutError(
                f"Row {row} describes {col} cells, expected {size}."
            )
    return grid


def layout_to_notation(grid: Grid) -> str:
    """Rows are separated by slashes."""
    return "/".join(_row_to_notation(grid, row) for row in range(grid.size))


def _row_to_notation(grid: Grid, row: int) -> str:
    characters: list[str] = []
    empty_count = 0
    for col in range(grid.size):
        piece = grid.piece_at((row, col))
        if piece is None:
            empty_count += 1
            continue

        characters.append(_empty_run(empty_count))
        empty_count = 0
        characters.append(piece.to_notation())
        if piece.has_moved:
            characters.append(MOVED_MARKER)
    characters.append(_empty_run(empty_count))
    return "".join(characters)


def _empty_run(count: int) -> str:
    """Runs longer than 9 cells are split up: 12 -> '93'"""
    digits: list[str] = []
    while count > 0:
        run = min(count, MAX_RUN)
        digits.append(str(run))
        count -= run
    return "".join(digits)


def is_valid_layout(layout: str, size: int = DEFAULT_BOARD_SIZE) -> bool:
    try:
        parse_layout(layout, size)
    except InvalidLayoutError:
        return False
    return True


# --- POSITIONS ---
def position_to_notation(position: Position) -> str:
    row, col = position
    return f"{row},{col}"


def position_from_notation(text: str) -> Position:
    """'6,3' -> (6, 3)"""
    parts = text.split(",")
    if len(parts) != 2 or not all(part.strip().lstrip("-").isdigit() for part in parts):
        raise InvalidLayoutError(f"Cannot interpret {text!r} as a position 'row,col'.")
    return (int(parts[0]), int(parts[1]))
