"""
Database Connection Module
Handles the SQLAlchemy async engine, session factory and declarative base.
"""

from typing import Any, AsyncIterator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings
import logging

settings = get_settings()
logger = logging.getLogger(__name__)


def engine_options(database_url: str) -> dict[str, Any]:
    """Pool options for the given backend (SQLite cannot take a sized pool)."""
    if database_url.startswith("sqlite"):
        options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url.endswith("://"):
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_size": 5,  # Connection pool size
        "max_overflow": 10,  # Extra connections when pool is full
        "pool_pre_ping": True,
    }


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    return create_async_engine(database_url, echo=echo, **engine_options(database_url))


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False  # Objects remain accessible after commit
    )


engine = build_engine(settings.database_url, echo=settings.database_echo)

# Session factory - creates new database sessions
async_session_maker = build_session_maker(engine)


# Base class for all our models
class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    Dependency injection for FastAPI routes.
    Yields a database session, rolls back anything left uncommitted
    after a failure, and ensures cleanup.
    """
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db(bind: AsyncEngine = engine) -> None:
    """
    Create all tables in database.
    Called once at application startup.
    """
    # Register every model on Base.metadata before create_all
    from app import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")
