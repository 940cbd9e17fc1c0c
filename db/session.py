"""
Async SQLAlchemy session management.

Provides async database engine, session factory, and FastAPI dependency
for database access.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config import Settings

logger = logging.getLogger(__name__)

# Global engine and session factory (initialized in init_db)
_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def init_db(settings: Settings) -> AsyncEngine:
    """
    Initialize async database engine and session factory.

    Should be called once during application startup (in main.py lifespan).

    Args:
        settings: Application settings containing database configuration

    Returns:
        AsyncEngine: The initialized database engine
    """
    global _engine, _async_session_factory

    logger.info(
        "Initializing database connection",
        extra={
            "host": settings.postgres_host,
            "port": settings.postgres_port,
            "database": settings.postgres_db,
            "sqlite": settings.uses_sqlite,
        },
    )

    if settings.uses_sqlite:
        _engine = create_async_engine(settings.database_url, echo=settings.is_dev)
    else:
        _engine = create_async_engine(
            settings.database_url,
            echo=settings.is_dev,  # Log SQL in development
            pool_size=settings.postgres_pool_size,
            max_overflow=settings.postgres_max_overflow,
            pool_timeout=settings.postgres_pool_timeout,
            pool_pre_ping=True,  # Verify connections before using
            pool_recycle=3600,  # Recycle connections after 1 hour
        )

    _async_session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flush for better control
    )

    logger.info("Database connection initialized successfully")
    return _engine


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session.

    Rolls back on error and always closes the session. Routes commit
    explicitly before producing their response.

    Yields:
        AsyncSession: Database session for the request
    """
    if _async_session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() in application startup.")

    async with _async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def close_db() -> None:
    """
    Close database engine and cleanup connections.

    Should be called during application shutdown (in main.py lifespan).
    """
    global _engine, _async_session_factory

    if _engine is not None:
        logger.info("Closing database connection")
        await _engine.dispose()
        _engine = None
        _async_session_factory = None
        logger.info("Database connection closed")
