"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING_FOR_PLAYERS = "waiting for players"
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


# --- NOTE The engine uses its own Team (IntEnum, 1 and 2) as the rules talk about "team 1" and "team 2".
# --- The boundary layers use these names, as they read better in JSON and in the database records.


class TeamName(StrEnum):
    ONE = "one"
    TWO = "two"
