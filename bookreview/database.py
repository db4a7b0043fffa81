"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the BookReview API.

We use SYNCHRONOUS SQLAlchemy: every operation in this service is a single
lookup, insert or delete, so async drivers would add complexity without
measurable benefit. FastAPI runs sync route handlers in its thread pool.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

This is implemented using FastAPI's dependency injection (get_db).
"""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookreview.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# SQLite (the development default) needs check_same_thread=False because
# FastAPI hands the session to worker threads. Pool sizing only applies to
# server databases such as PostgreSQL.

def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine with dialect-appropriate connection arguments.

    Args:
        database_url: SQLAlchemy URL
        echo: Log every SQL statement

    Returns:
        Configured SQLAlchemy Engine
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=echo,
        )

    return create_engine(
        database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,  # Verify connections are alive before using
        echo=echo,
    )


engine = build_engine(settings.database_url, echo=settings.debug)


# =============================================================================
# Session Factory
# =============================================================================
# - autocommit=False: services decide when to commit
# - autoflush=False: don't auto-flush before queries

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

    Alembic reads Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, the route handler uses it, and
    the finally block closes it even if the handler raised.

    Usage in Routes:
        @router.get("/books")
        def list_books(db: Session = Depends(get_db)):
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
    Create all database tables that don't exist yet.

    Used on startup in development and by the seed script.
    In production, run Alembic migrations instead.
    """
    # Import models so they're registered on Base.metadata
    import bookreview.models  # noqa: F401

    Base.metadata.create_all(bind=engine)

