"""Claim Store — records of units taken from listings.

Invariants:
    - Stores the claim only; quantity bookkeeping on the listing is done by the
      claim workflow through the listing store
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sharehub.core.domain_types import ClaimId, ItemId, UserId
from sharehub.core.errors import ResourceNotFoundError
from sharehub.models.claim import Claim
from sharehub.stores.unit_of_work import guarded_read, unit_of_work


class SqlClaimStore:
    """Claim persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def claim(
        self, claimer_id: UserId, listing_id: ItemId, quantity: int,
    ) -> Claim:
        claim = Claim(
            claimer_id=claimer_id, listing_id=listing_id, quantity=quantity,
        )
        async with unit_of_work(self.db, "create claim"):
            self.db.add(claim)
        return claim

    async def get_by_id(self, claim_id: ClaimId) -> Claim:
        async with guarded_read(self.db, "get claim"):
            result = await self.db.execute(select(Claim).where(Claim.id == claim_id))
        claim = result.scalar_one_or_none()
        if claim is None:
            raise ResourceNotFoundError("Claim", str(claim_id))
        return claim

    async def get_by_listing(self, listing_id: ItemId) -> list[Claim]:
        async with guarded_read(self.db, "list claims for listing"):
            result = await self.db.execute(
                select(Claim).where(Claim.listing_id == listing_id)
                .order_by(Claim.created_at),
            )
        return list(result.scalars().all())

    async def get_by_claimer(self, claimer_id: UserId) -> list[Claim]:
        async with guarded_read(self.db, "list claims by claimer"):
            result = await self.db.execute(
                select(Claim).where(Claim.claimer_id == claimer_id)
                .order_by(Claim.created_at.desc()),
            )
        return list(result.scalars().all())

    async def list_all(self) -> list[Claim]:
        async with guarded_read(self.db, "list claims"):
            result = await self.db.execute(
                select(Claim).order_by(Claim.created_at.desc()),
            )
        return list(result.scalars().all())

    async def delete(self, claim_id: ClaimId) -> None:
        claim = await self.get_by_id(claim_id)
        async with unit_of_work(self.db, "delete claim"):
            await self.db.delete(claim)
