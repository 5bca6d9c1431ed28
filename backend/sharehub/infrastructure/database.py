"""Database Session Manager — one async engine per process, sessions for requests and sweep ticks.

Invariants:
    - A session that leaves its block with a SQLAlchemy error is rolled back
      and the error surfaces as DatabaseError (core/errors.py)
    - Request handlers get sessions through get_db; the sweep scheduler opens
      its own through session(), never sharing one with a request
    - dispose() runs after the scheduler has stopped (main.py lifespan)

Design Decisions:
    - Module-level db_manager set by init_db from the lifespan; readiness
      probe and get_db read it at call time so tests can swap it
    - expire_on_commit=False: every store commits its own unit of work and
      coordinators keep reading the returned rows afterwards
    - SQLite URLs skip pool sizing (aiosqlite in tests uses a static pool)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from sharehub.core.errors import DatabaseError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_FAILURE_LABELS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "unknown"),
)


def _engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    options: dict = {"pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
        )
    return options


def _as_database_error(exc: SQLAlchemyError) -> DatabaseError:
    for exc_type, message, operation in _FAILURE_LABELS:
        if isinstance(exc, exc_type):
            return DatabaseError(message, operation)
    return DatabaseError("Database operation failed", "unknown")


class DatabaseSessionManager:
    """Owns the engine; hands out sessions that roll back on SQL failure."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url, **_engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Session rolled back after {type(e).__name__}: {e}")
            raise _as_database_error(e)
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """SELECT 1 through a fresh session (readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
