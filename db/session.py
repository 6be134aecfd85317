"""Database session management for the hall pricing service."""

from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.pool import NullPool

from core.settings import settings


class DatabaseConfig:
    """Database configuration settings."""

    # Connection pool settings
    POOL_SIZE: int = settings.db_pool_size
    MAX_OVERFLOW: int = settings.db_max_overflow
    POOL_TIMEOUT: int = 30
    POOL_RECYCLE: int = 3600
    POOL_PRE_PING: bool = True

    # Query settings
    ECHO: bool = settings.db_echo

    # Connection settings (asyncpg only)
    POSTGRES_CONNECT_ARGS: dict = {
        "server_settings": {
            "application_name": "hall_pricing",
        },
        "command_timeout": 60,
        "timeout": 10,
    }


def _connect_args(url: str) -> dict:
    if url.startswith("postgresql+asyncpg://"):
        return DatabaseConfig.POSTGRES_CONNECT_ARGS
    return {}


def create_engine(
    url: Optional[str] = None,
    pool_size: int = DatabaseConfig.POOL_SIZE,
    max_overflow: int = DatabaseConfig.MAX_OVERFLOW,
    echo: bool = DatabaseConfig.ECHO,
) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    Args:
        url: Database URL, defaults to settings.database_url
        pool_size: Number of connections to maintain in pool
        max_overflow: Max number of connections to create beyond pool_size
        echo: Whether to log all SQL statements

    Returns:
        Async SQLAlchemy engine
    """
    url = url or settings.database_url
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=echo, poolclass=NullPool)

    return create_async_engine(
        url,
        echo=echo,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_timeout=DatabaseConfig.POOL_TIMEOUT,
        pool_recycle=DatabaseConfig.POOL_RECYCLE,
        pool_pre_ping=DatabaseConfig.POOL_PRE_PING,
        connect_args=_connect_args(url),
    )


def create_test_engine(url: str) -> AsyncEngine:
    """
    Create async engine for testing with NullPool.

    Args:
        url: Database URL

    Returns:
        Async SQLAlchemy engine with NullPool
    """
    return create_async_engine(
        url,
        echo=False,
        poolclass=NullPool,
        connect_args=_connect_args(url),
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to an engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Created on first use so importing the package never opens a driver
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_engine() -> AsyncEngine:
    """Return the process-wide engine."""
    global _engine
    if _engine is None:
        _engine = create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory


async def init_db(engine: Optional[AsyncEngine] = None) -> None:
    """Initialize database by creating all tables."""
    from .base import Base
    from . import models_sqlalchemy  # noqa: F401

    async with (engine or get_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database engine and all connections."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
