"""Database session and metadata configuration."""

from contextlib import contextmanager
from functools import lru_cache
from typing import Generator, Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import get_settings

Base = declarative_base()


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Build the engine from settings on first use."""

    settings = get_settings()
    return create_engine(settings.database_url, future=True, pool_pre_ping=True)


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker:
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, future=True)


def init_db(engine: Engine) -> None:
    """Create any missing tables."""

    from .. import models  # noqa: F401  register mappers on Base.metadata

    Base.metadata.create_all(engine)


def get_db() -> Generator:
    """Yield a database session for request lifetime."""

    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(session: Session) -> Iterator[Session]:
    """Run a unit of work: commit on success, roll back on any failure."""

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
