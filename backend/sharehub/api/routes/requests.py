"""Request Routes — CRUD over requests through the coordinators.

Invariants:
    - POST creates request + need-by expiration record (+ tags) as one logical step
    - PATCH with hide=true hides the request (author only) instead of editing it
    - DELETE removes expiration record and every offer before the request itself
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from sharehub.api.dependencies import get_current_user, get_stores
from sharehub.config import get_settings
from sharehub.core.domain_types import ItemId, ItemKind, UserId
from sharehub.schemas.items import (
    ExpirationResponse, RequestCreate, RequestCreated, RequestResponse,
    RequestUpdate,
)
from sharehub.services.cascade_delete import CascadeDeletion
from sharehub.services.create_with_expiration import CreationSaga
from sharehub.services.edit_item import ItemEditing
from sharehub.stores.registry import StoreRegistry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/requests", tags=["requests"])

_ITEM_FIELDS = ("name", "quantity", "image", "description")


@router.get("", response_model=list[RequestResponse])
async def list_requests(
    requester: UUID | None = Query(None),
    stores: StoreRegistry = Depends(get_stores),
):
    requests = stores.items(ItemKind.REQUEST)
    if requester:
        return await requests.get_by_author(UserId(requester))
    return await requests.list_all()


@router.get("/{request_id}", response_model=RequestResponse)
async def get_request(
    request_id: UUID, stores: StoreRegistry = Depends(get_stores),
):
    return await stores.items(ItemKind.REQUEST).get_by_id(ItemId(request_id))


@router.post(
    "", response_model=RequestCreated, status_code=status.HTTP_201_CREATED,
)
async def create_request(
    body: RequestCreate,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    result = await CreationSaga(stores).create_with_expiration(
        ItemKind.REQUEST,
        user,
        body.model_dump(include=set(_ITEM_FIELDS)),
        body.expire_date,
        body.expire_time or get_settings().default_expiration_time,
        tags=body.tags,
    )
    return RequestCreated(
        msg="Request successfully created!",
        request=RequestResponse.model_validate(result.item),
        expiration=ExpirationResponse.model_validate(result.expiration),
        untagged=result.untagged,
    )


@router.patch("/{request_id}", response_model=RequestResponse)
async def update_request(
    request_id: UUID,
    body: RequestUpdate,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    editing = ItemEditing(stores)
    if body.hide:
        return await editing.hide_item(ItemKind.REQUEST, ItemId(request_id), user)
    return await editing.edit_item(
        ItemKind.REQUEST,
        ItemId(request_id),
        user,
        body.model_dump(include=set(_ITEM_FIELDS), exclude_none=True),
        expire_date=body.expire_date,
        expire_time=body.expire_time or get_settings().default_expiration_time,
    )


@router.delete("/{request_id}")
async def delete_request(
    request_id: UUID,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    await CascadeDeletion(stores).delete_item(ItemKind.REQUEST, ItemId(request_id), user)
    return {"msg": "Request deleted!"}
