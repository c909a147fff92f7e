"""Database connection and session management."""
import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker, Session

from cooking_cost.config import Settings, get_settings
from cooking_cost.exceptions import classify_integrity_error

logger = logging.getLogger(__name__)


def get_database_url(settings: Settings | None = None) -> str:
    """Build database URL from settings.

    An explicit DATABASE_URL wins; otherwise a PostgreSQL URL is assembled
    from the DB_* parts.
    """
    settings = settings or get_settings()
    if settings.DATABASE_URL:
        return settings.DATABASE_URL

    user = settings.DB_USER
    password = settings.DB_PASSWORD
    host = settings.DB_HOST
    port = settings.DB_PORT
    database = settings.DB_NAME
    return f"postgresql://{user}:{password}@{host}:{port}/{database}"


@lru_cache
def get_engine():
    """Create SQLAlchemy engine (cached).

    The pool is the only shared mutable resource in the process. When all
    connections are checked out, callers wait up to DB_POOL_TIMEOUT seconds
    and then get sqlalchemy.exc.TimeoutError.
    """
    settings = get_settings()
    return create_engine(
        get_database_url(settings),
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
    )


def dispose_engine() -> None:
    """Close pooled connections if an engine was ever created."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
        get_engine.cache_clear()
        logger.info("Database connection pool disposed")


def get_session() -> Session:
    """Create a new database session."""
    SessionLocal = sessionmaker(bind=get_engine())
    return SessionLocal()


def get_db():
    """Dependency for FastAPI routes that need a database session."""
    db = get_session()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Run a unit of work: commit on success, roll back on any error.

    Integrity errors are reclassified into ConflictError/ValidationError.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise classify_integrity_error(e) from e
    except Exception:
        db.rollback()
        raise
