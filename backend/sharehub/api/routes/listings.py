"""Listing Routes — CRUD over listings through the creation, editing and deletion coordinators.

Invariants:
    - POST creates listing + expiration record + tags as one logical step
    - DELETE removes the expiration record first, then the listing
    - Only the author may PATCH, hide, or DELETE
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from sharehub.api.dependencies import get_current_user, get_stores
from sharehub.config import get_settings
from sharehub.core.domain_types import ItemId, ItemKind, UserId
from sharehub.schemas.items import (
    ExpirationResponse, ListingCreate, ListingCreated, ListingResponse,
    ListingUpdate,
)
from sharehub.services.cascade_delete import CascadeDeletion
from sharehub.services.create_with_expiration import CreationSaga
from sharehub.services.edit_item import ItemEditing
from sharehub.stores.registry import StoreRegistry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/listings", tags=["listings"])

_ITEM_FIELDS = ("name", "meetup_location", "image", "quantity", "description")


@router.get("", response_model=list[ListingResponse])
async def list_listings(
    author: UUID | None = Query(None),
    stores: StoreRegistry = Depends(get_stores),
):
    listings = stores.items(ItemKind.LISTING)
    if author:
        return await listings.get_by_author(UserId(author))
    return await listings.list_all()


@router.get("/{listing_id}", response_model=ListingResponse)
async def get_listing(
    listing_id: UUID, stores: StoreRegistry = Depends(get_stores),
):
    return await stores.items(ItemKind.LISTING).get_by_id(ItemId(listing_id))


@router.post(
    "", response_model=ListingCreated, status_code=status.HTTP_201_CREATED,
)
async def create_listing(
    body: ListingCreate,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    result = await CreationSaga(stores).create_with_expiration(
        ItemKind.LISTING,
        user,
        body.model_dump(include=set(_ITEM_FIELDS)),
        body.expire_date,
        body.expire_time or get_settings().default_expiration_time,
        tags=body.tags,
    )
    return ListingCreated(
        msg="Listing successfully created!",
        listing=ListingResponse.model_validate(result.item),
        expiration=ExpirationResponse.model_validate(result.expiration),
        untagged=result.untagged,
    )


@router.patch("/{listing_id}", response_model=ListingResponse)
async def edit_listing(
    listing_id: UUID,
    body: ListingUpdate,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    return await ItemEditing(stores).edit_item(
        ItemKind.LISTING,
        ItemId(listing_id),
        user,
        body.model_dump(include=set(_ITEM_FIELDS), exclude_none=True),
        expire_date=body.expire_date,
        expire_time=body.expire_time or get_settings().default_expiration_time,
    )


@router.post("/{listing_id}/hide", response_model=ListingResponse)
async def hide_listing(
    listing_id: UUID,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    return await ItemEditing(stores).hide_item(ItemKind.LISTING, ItemId(listing_id), user)


@router.delete("/{listing_id}")
async def delete_listing(
    listing_id: UUID,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    await CascadeDeletion(stores).delete_item(ItemKind.LISTING, ItemId(listing_id), user)
    return {"msg": "Listing deleted!"}
