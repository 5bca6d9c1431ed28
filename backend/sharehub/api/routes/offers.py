"""Offer Routes — offers on requests, including acceptance.

Invariants:
    - Accepting hides the parent request and marks the offer accepted;
      sibling offers are left as they are
    - Only the offerer may edit or withdraw
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from sharehub.api.dependencies import get_current_user, get_stores
from sharehub.core.domain_types import ItemId, OfferId, UserId
from sharehub.schemas.offers import OfferCreate, OfferResponse, OfferUpdate
from sharehub.services.offer_workflows import OfferWorkflows
from sharehub.stores.registry import StoreRegistry

router = APIRouter(prefix="/api/v1/offers", tags=["offers"])


@router.post("", response_model=OfferResponse, status_code=status.HTTP_201_CREATED)
async def make_offer(
    body: OfferCreate,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    return await OfferWorkflows(stores).make_offer(
        user, ItemId(body.request_id),
        body.model_dump(include={"location", "image", "message"}),
    )


@router.get("", response_model=list[OfferResponse])
async def list_offers(
    request_id: UUID | None = Query(None),
    offerer: UUID | None = Query(None),
    stores: StoreRegistry = Depends(get_stores),
):
    if request_id:
        return await stores.offers.get_by_item(ItemId(request_id))
    if offerer:
        return await stores.offers.get_by_offerer(UserId(offerer))
    return await stores.offers.list_all()


@router.get("/{offer_id}", response_model=OfferResponse)
async def get_offer(offer_id: UUID, stores: StoreRegistry = Depends(get_stores)):
    return await stores.offers.get_by_id(OfferId(offer_id))


@router.post("/{offer_id}/accept")
async def accept_offer(
    offer_id: UUID,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    await OfferWorkflows(stores).accept_offer(OfferId(offer_id), user)
    return {"msg": "Accepted offer!"}


@router.patch("/{offer_id}", response_model=OfferResponse)
async def edit_offer(
    offer_id: UUID,
    body: OfferUpdate,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    return await OfferWorkflows(stores).edit_offer(
        OfferId(offer_id), user, body.model_dump(exclude_none=True),
    )


@router.delete("/{offer_id}")
async def withdraw_offer(
    offer_id: UUID,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    await OfferWorkflows(stores).withdraw_offer(OfferId(offer_id), user)
    return {"msg": "Offer withdrawn!"}
