"""Claim Workflow — take units of a listing, or give them back.

Invariants:
    - A claim needs a visible listing and 1 <= quantity <= remaining units
    - claim -> decrement listing quantity: if the decrement fails the claim is
      deleted and the original error raised
    - The compensation deletes by the claim id captured at creation; a rolled-back
      write expires the ORM row itself
    - A listing claimed down to zero units is hidden (best-effort)
    - unclaim deletes the claim (claimer only) and restores the units
      best-effort; it never unhides the listing
"""

import logging

from sharehub.core.claim_rules import check_claim_quantity, is_exhausted
from sharehub.core.domain_types import ClaimId, ItemId, ItemKind, UserId
from sharehub.core.errors import ErrorContext, NotAllowedError
from sharehub.core.repository_protocols import ClaimLike, StoreProvider
from sharehub.services.saga import SagaStep, run_saga

logger = logging.getLogger(__name__)


class ClaimWorkflow:
    """Claims across the claim store and the listing store."""

    def __init__(self, stores: StoreProvider):
        self.stores = stores

    async def claim_listing(
        self, listing_id: ItemId, claimer_id: UserId, quantity: int,
    ) -> ClaimLike:
        listings = self.stores.items(ItemKind.LISTING)
        listing = await listings.get_by_id(listing_id)
        if listing.hidden:
            raise NotAllowedError(
                "Listing is no longer available",
                ErrorContext(item_id=str(listing_id), item_kind=ItemKind.LISTING.value),
            )
        remaining = check_claim_quantity(quantity, listing.quantity)

        created: list[ClaimId] = []

        async def take_units(r):
            claim = await self.stores.claims.claim(claimer_id, listing_id, quantity)
            created.append(claim.id)
            return claim

        async def drop_claim(_) -> None:
            await self.stores.claims.delete(created[0])

        steps = [
            SagaStep("claim", take_units, compensation=drop_claim),
            SagaStep(
                "quantity",
                lambda r: listings.edit(listing_id, {"quantity": remaining}),
            ),
        ]
        if is_exhausted(remaining):
            steps.append(SagaStep(
                "hide", lambda r: listings.set_hidden(listing_id), required=False,
            ))

        outcome = await run_saga(
            "claim listing", steps,
            {"item_id": str(listing_id), "item_kind": ItemKind.LISTING.value},
        )
        if outcome.skipped:
            return await self.stores.claims.get_by_id(created[0])
        return outcome.results["claim"]

    async def unclaim(self, claim_id: ClaimId, user_id: UserId) -> None:
        claim = await self.stores.claims.get_by_id(claim_id)
        if claim.claimer_id != user_id:
            raise NotAllowedError("User is not the claimer of this claim")
        listings = self.stores.items(ItemKind.LISTING)
        listing_id, units = claim.listing_id, claim.quantity

        async def restore_units(_):
            listing = await listings.get_by_id(listing_id)
            await listings.edit(listing_id, {"quantity": listing.quantity + units})

        await run_saga(
            "unclaim listing",
            [
                SagaStep("claim", lambda r: self.stores.claims.delete(claim_id)),
                SagaStep("quantity", restore_units, required=False),
            ],
            {"claim_id": str(claim_id), "item_id": str(listing_id)},
        )
