"""Expiration Routes — read an item's expiration record, retarget it.

Invariants:
    - {kind} is "listing" or "request"; records are looked up within that kind
    - Only the item's author may retarget its expiration
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from sharehub.api.dependencies import get_current_user, get_stores
from sharehub.config import get_settings
from sharehub.core.domain_types import ExpirationId, ItemId, ItemKind, UserId
from sharehub.schemas.items import ExpirationResponse, ExpirationUpdate
from sharehub.services.edit_item import ItemEditing
from sharehub.stores.registry import StoreRegistry

router = APIRouter(prefix="/api/v1/expirations", tags=["expirations"])


@router.get("/{kind}/items/{item_id}", response_model=ExpirationResponse | None)
async def get_item_expiration(
    kind: ItemKind, item_id: UUID, stores: StoreRegistry = Depends(get_stores),
):
    return await stores.expirations(kind).get_by_item(ItemId(item_id))


@router.patch("/{kind}/{record_id}", response_model=ExpirationResponse)
async def edit_expiration(
    kind: ItemKind,
    record_id: UUID,
    body: ExpirationUpdate,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    return await ItemEditing(stores).edit_expiration(
        kind, ExpirationId(record_id), user, body.expire_date,
        body.expire_time or get_settings().default_expiration_time,
    )
