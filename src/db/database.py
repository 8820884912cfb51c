"""Generate database session"""

import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import SETTINGS
from src.db.schema import Base

logger = logging.getLogger(__name__)

connect_args = (
    {"check_same_thread": False} if SETTINGS.database_url.startswith("sqlite") else {}
)
engine = create_engine(
    SETTINGS.database_url, echo=SETTINGS.sql_echo, connect_args=connect_args
)
SessionLocal = sessionmaker(bind=engine)


def init_db() -> None:
    """Ensure all tables are created"""
    logger.info("creating tables on %s", engine.url)
    Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
