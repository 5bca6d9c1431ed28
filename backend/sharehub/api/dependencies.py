"""Route Dependencies — acting user and per-request store registry.

Invariants:
    - The acting user arrives as the X-User-Id header, set by the upstream
      session layer; a missing or malformed header is a 400 validation error
    - One StoreRegistry per request, bound to the request's DB session
"""

from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from sharehub.core.domain_types import UserId
from sharehub.infrastructure.database import get_db
from sharehub.stores.registry import StoreRegistry


async def get_current_user(x_user_id: UUID = Header(...)) -> UserId:
    return UserId(x_user_id)


async def get_stores(db: AsyncSession = Depends(get_db)) -> StoreRegistry:
    return StoreRegistry(db)
