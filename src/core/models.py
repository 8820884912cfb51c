"""
The GameModel crosses every layer boundary: API <-> Service <-> DB, and Service <-> engine (Match.from_model / to_model).

Only strings, lists and dicts, so each layer keeps its own richer types to itself.
"""

from dataclasses import dataclass

TeamKey = str  # "one" / "two"
PlayerName = str


@dataclass
class GameModel:
    """A match in transport form: state notation, earlier states, move codes, players per team and status."""

    current_state: str
    history_states: list[str]
    moves: list[str]
    registered_players: dict[TeamKey, PlayerName]
    status: str
