"""Generate database session"""

from functools import lru_cache
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from chessmate.core.config import get_settings
from chessmate.db.schema import Base


@lru_cache
def get_engine() -> Engine:
    """Created on first use, with the URL from the settings. Ensure all tables are created."""
    database_url = get_settings().database_url
    connect_args = (
        {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    )
    engine = create_engine(database_url, connect_args=connect_args)
    Base.metadata.create_all(bind=engine)
    return engine


def get_db() -> Generator[Session, None, None]:
    session_local = sessionmaker(bind=get_engine())
    db = session_local()
    try:
        yield db
    finally:
        db.close()
