"""Database engine, session and error-translation helpers."""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, Engine, StaticPool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from stockboard.core.exceptions import StorageError

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """Create an engine for the given URL; in-memory SQLite shares one connection."""
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False},  # SQLite-specific
        echo=False,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to the engine."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )


def init_db(engine: Engine) -> None:
    """Initialize database tables."""
    from stockboard.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


@contextmanager
def storage_guard(db: Session, action: str) -> Iterator[None]:
    """
    Translate SQLAlchemy failures into StorageError.

    The session is rolled back first, so a failed write leaves nothing behind.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Storage failure while trying to %s: %s", action, exc)
        raise StorageError(f"Failed to {action}") from exc
