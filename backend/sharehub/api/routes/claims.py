"""Claim Routes — claiming units of a listing and giving them back."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from sharehub.api.dependencies import get_current_user, get_stores
from sharehub.core.domain_types import ClaimId, ItemId, UserId
from sharehub.schemas.offers import ClaimCreate, ClaimResponse
from sharehub.services.claim_listing import ClaimWorkflow
from sharehub.stores.registry import StoreRegistry

router = APIRouter(prefix="/api/v1/claims", tags=["claims"])


@router.post("", response_model=ClaimResponse, status_code=status.HTTP_201_CREATED)
async def claim(
    body: ClaimCreate,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    return await ClaimWorkflow(stores).claim_listing(
        ItemId(body.listing_id), user, body.quantity,
    )


@router.get("", response_model=list[ClaimResponse])
async def list_claims(
    listing_id: UUID | None = Query(None),
    claimer: UUID | None = Query(None),
    stores: StoreRegistry = Depends(get_stores),
):
    if listing_id:
        return await stores.claims.get_by_listing(ItemId(listing_id))
    if claimer:
        return await stores.claims.get_by_claimer(UserId(claimer))
    return await stores.claims.list_all()


@router.get("/{claim_id}", response_model=ClaimResponse)
async def get_claim(claim_id: UUID, stores: StoreRegistry = Depends(get_stores)):
    return await stores.claims.get_by_id(ClaimId(claim_id))


@router.delete("/{claim_id}")
async def unclaim(
    claim_id: UUID,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    await ClaimWorkflow(stores).unclaim(ClaimId(claim_id), user)
    return {"msg": "Claim removed!"}
