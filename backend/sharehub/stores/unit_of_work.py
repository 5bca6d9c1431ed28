"""Unit of Work — commit-or-rollback wrappers shared by the stores.

Invariants:
    - A failed write or read rolls the session back before DatabaseError
      propagates, so the same session stays usable for the next store call
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sharehub.core.errors import DatabaseError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def unit_of_work(db: AsyncSession, operation: str) -> AsyncGenerator[None, None]:
    """Commit on clean exit, roll back and raise DatabaseError on SQL failure."""
    try:
        yield
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.error(f"Integrity error during {operation}: {e}")
        raise DatabaseError("Integrity constraint violated", operation)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Database error during {operation}: {e}")
        raise DatabaseError("Database operation failed", operation)


@asynccontextmanager
async def guarded_read(db: AsyncSession, operation: str) -> AsyncGenerator[None, None]:
    """Roll back an aborted read so the session survives for the next store call."""
    try:
        yield
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Database error during {operation}: {e}")
        raise DatabaseError("Database read failed", operation)
