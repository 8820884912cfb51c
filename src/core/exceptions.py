"""
Custom exceptions shared across layers.

Everything raised on purpose by this project derives from GameError, so the API layer can catch one top-level type.
"""


class GameError(Exception):
    """Base class of all expected errors of the board game."""


# --- DOMAIN: GRID / RESOLVER ---
class OutOfBoundsError(GameError):
    """A position outside of [0, size) was queried or written. Always a caller bug."""


class NoSelectionError(GameError):
    """A move was committed while no piece is selected."""


class IllegalOverrideError(GameError):
    """
    Precondition of the rendering layer was violated.

    NOTE: The engine never raises this itself. It is declared here so the presentation layer shares the same taxonomy.
    """


class IllegalMoveError(GameError):
    """Destination is not one of the moves offered for the selected piece."""


class NotYourTurnError(GameError):
    """Selecting or moving on behalf of the team that is not on turn."""


class GameStateError(GameError):
    """Action is not valid in the current phase of the turn or status of the game."""


class InvalidLayoutError(GameError):
    """Layout / state notation could not be parsed."""


# --- BOUNDARY LAYERS ---
class InvalidRequestError(GameError):
    """Request data that passed type validation, but does not make sense for the game."""


class RepositoryError(GameError):
    """Record not found / could not be stored."""
