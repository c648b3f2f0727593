"""Generate database session"""

import logging
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings, get_settings
from src.db.schema import Base

logger = logging.getLogger(__name__)


def create_session_factory(settings: Settings) -> sessionmaker[Session]:
    """Engine + session factory for the configured database. Tables are created if they do not exist yet."""
    engine = create_engine(settings.database_url, echo=settings.db_echo)
    Base.metadata.create_all(bind=engine)
    logger.debug("Database ready at %s", settings.database_url)
    return sessionmaker(bind=engine)


def get_db(settings: Optional[Settings] = None) -> Generator[Session, None, None]:
    session_factory = create_session_factory(settings or get_settings())
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
