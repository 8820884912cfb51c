"""
Application settings.

- Loads a `.env` file (if present) into the environment first.
- Exposes SETTINGS with the values the outer layers (database / API) need. The board itself is configured by BoardConfig.
"""

import os
from dataclasses import dataclass
from typing import Any, Callable

from dotenv import load_dotenv

load_dotenv()

ENV_PREFIX = "HYBRID_BOARD_"


def _get(name: str, default: Any, cast: Callable[[str], Any] | None = None) -> Any:
    value = os.environ.get(f"{ENV_PREFIX}{name}")
    if value is None:
        return default
    return cast(value) if cast else value


def _to_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str
    log_level: str
    sql_echo: bool

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=_get("DATABASE_URL", "sqlite:///./hybrid_board.db"),
            log_level=_get("LOG_LEVEL", "INFO", str.upper),
            sql_echo=_get("SQL_ECHO", False, _to_bool),
        )


SETTINGS = Settings.from_env()
