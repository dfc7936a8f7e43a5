"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 as the entity store of the catalog.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

This is implemented using FastAPI's dependency injection (get_db).

Referential Integrity
=====================
The catalog relies on the database to enforce that every book points at an
existing author and that an author with books cannot be deleted. PostgreSQL
always enforces foreign keys; SQLite only does so when the
``foreign_keys`` pragma is switched on for each connection, which
``enable_sqlite_foreign_keys`` takes care of.
"""

from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from library_catalog.config import get_settings

settings = get_settings()


def enable_sqlite_foreign_keys(engine: Engine) -> Engine:
    """
    Turn on foreign key enforcement for every new SQLite connection.

    Does nothing for other dialects. Returns the engine so it can be
    used inline when building one.
    """
    if engine.dialect.name != "sqlite":
        return engine

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def _engine_options() -> dict[str, Any]:
    """Build create_engine() keyword arguments for the configured URL."""
    options: dict[str, Any] = {
        "echo": settings.debug,  # Log SQL in debug mode
    }
    if settings.is_sqlite:
        # Requests may be served from a thread pool
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,  # Verify connections are alive before using
        )
    return options


# =============================================================================
# Database Engine
# =============================================================================
# One process-wide engine; its connection pool is shared by all handlers.
engine = enable_sqlite_foreign_keys(
    create_engine(settings.database_url, **_engine_options())
)


# =============================================================================
# Session Factory
# =============================================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses ``Base.metadata`` to discover the tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Creates a session, yields it to the route handler and closes it when
    the request ends, even if the handler raised.

    Usage in Routes:
        @router.get("/authors")
        def list_authors(db: Session = Depends(get_db)):
            ...

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    WARNING: In production, use Alembic migrations instead!
    """
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Only use in development and tests.
    """
    Base.metadata.drop_all(bind=engine)
