"""Database connection and session management."""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_settings

logger = logging.getLogger(__name__)


def _enable_sqlite_transactions(sqlite_engine) -> None:
    """Let SQLAlchemy own BEGIN so SAVEPOINTs nest, and enforce foreign keys."""

    @event.listens_for(sqlite_engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        # Stop pysqlite from issuing its own BEGIN/COMMIT
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(sqlite_engine, "begin")
    def on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_db_engine(database_url: str | None = None):
    """Create SQLAlchemy engine with connection pooling.

    In-memory SQLite gets a single shared connection so every session sees
    the same database.
    """
    url = database_url or get_settings().database_url

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        sqlite_engine = create_engine(url, **kwargs)
        _enable_sqlite_transactions(sqlite_engine)
        return sqlite_engine

    engine = create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,  # Verify connections before using
        echo=False,  # Set to True for SQL debugging
    )
    return engine


# Create engine and session factory
engine = create_db_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """Context manager for database sessions.

    Commits on success, rolls back on any exception.

    Usage:
        with get_db_session() as db:
            db.query(...)
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_db() -> Generator[Session, None, None]:
    """Dependency for FastAPI endpoints that need a database session."""
    with get_db_session() as db:
        yield db


def check_database_health() -> bool:
    """Verify database connection is working.

    Returns:
        True if database is healthy, False otherwise.
    """
    try:
        with get_db_session() as db:
            db.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


def dispose_engine() -> None:
    """Dispose of the engine and all connections.

    Call this during graceful shutdown.
    """
    engine.dispose()
