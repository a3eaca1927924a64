"""
Exercise Tracker: Database Handle and Session Management
==========================================================

What:  Async SQLAlchemy engine, session factory, and the FastAPI session dependency.
How:   `Database` owns one engine (connection pool) and one session factory.
       The application factory creates it, stores it on `app.state.database`,
       creates tables on startup and disposes the engine on shutdown.
       Route handlers receive a per-request session through `get_db_session`.
Who:   main.py (lifecycle), routes (dependency injection), tests (fixtures).

Engine options:
    PostgreSQL (asyncpg):  pooled connections sized from settings, pre-ping on checkout
    SQLite (aiosqlite):    file databases use the default pool; ":memory:" databases
                           use StaticPool so every session shares the one connection
"""

import logging
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from exercise_tracker.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM models; owns the shared metadata."""
    pass


def _engine_options(settings: Settings) -> Dict[str, Any]:
    """Builds create_async_engine kwargs appropriate to the configured backend."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}

    if settings.is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
        if make_url(settings.database_url).database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        return options

    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
    )
    return options


class Database:
    """
    Explicit handle to the user/exercise store.

    Attributes:
        engine:          AsyncEngine managing the connection pool
        session_factory: async_sessionmaker producing request-scoped sessions
    """

    def __init__(self, settings: Settings):
        self.url = settings.database_url
        self.engine: AsyncEngine = create_async_engine(
            settings.database_url, **_engine_options(settings)
        )
        # expire_on_commit=False keeps attributes readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_tables(self) -> None:
        """Creates the users and exercises tables if they do not exist."""
        # Register models with Base.metadata before create_all
        from exercise_tracker.models import exercise, user  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def ping(self) -> bool:
        """Runs SELECT 1; returns False instead of raising when the store is unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Closes every pooled connection."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Commits when the handler returns normally, rolls back and re-raises
    when it raises, and always closes the session.

    Example usage in a route:
        @router.get("/users")
        async def list_users(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
