"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base
from src.engine.grid import Grid
from src.engine.pieces import Piece, Position

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

GridFactory = Callable[[dict[Position, str]], Grid]


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session_shared() -> Generator[Session, None, None]:
    """Connection to a test database. Mock real setup with multiple sessions connecting to the same engine / database tables."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def grid_with() -> GridFactory:
    """
    Call the inner function with {position: notation character} to get an 8x8 grid with only those pieces.
    Upper case characters are team 1, lower case team 2 (see Piece.from_notation).
    """

    def _create_grid(pieces: dict[Position, str]) -> Grid:
        grid = Grid.empty(8)
        for position, character in pieces.items():
            grid.place_piece(Piece.from_notation(character, position))
        return grid

    return _create_grid
