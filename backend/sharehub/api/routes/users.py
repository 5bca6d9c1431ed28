"""User Routes — per-user activity counts for profile pages."""

from uuid import UUID

from fastapi import APIRouter, Depends

from sharehub.api.dependencies import get_stores
from sharehub.core.domain_types import ItemKind, UserId
from sharehub.schemas.items import UserCounts
from sharehub.stores.registry import StoreRegistry

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/{user_id}/counts", response_model=UserCounts)
async def get_user_counts(user_id: UUID, stores: StoreRegistry = Depends(get_stores)):
    return UserCounts(
        listings=await stores.items(ItemKind.LISTING).count_by_author(UserId(user_id)),
        requests=await stores.items(ItemKind.REQUEST).count_by_author(UserId(user_id)),
    )
