"""Offer Store — offers on requests and their lifecycle transitions.

Invariants:
    - accept() moves active -> accepted exactly once; any other start state
      raises OfferStateError (409)
    - remove() moves active -> removed (offerer withdraws)
    - remove_all_for_item() hard-deletes every offer on a request, whatever its state
"""

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from sharehub.core.domain_types import ItemId, OfferId, OfferState, UserId
from sharehub.core.errors import (
    ErrorContext, NotAllowedError, OfferStateError, ResourceNotFoundError,
)
from sharehub.models.offer import Offer
from sharehub.stores.unit_of_work import guarded_read, unit_of_work

logger = logging.getLogger(__name__)

_EDITABLE = ("location", "image", "message")


class SqlOfferStore:
    """Offer persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self, offerer_id: UserId, request_id: ItemId, fields: dict[str, Any],
    ) -> Offer:
        offer = Offer(
            offerer_id=offerer_id, request_id=request_id,
            state=OfferState.ACTIVE.value,
            **{k: v for k, v in fields.items() if k in _EDITABLE},
        )
        async with unit_of_work(self.db, "create offer"):
            self.db.add(offer)
        return offer

    async def get_by_id(self, offer_id: OfferId) -> Offer:
        async with guarded_read(self.db, "get offer"):
            result = await self.db.execute(select(Offer).where(Offer.id == offer_id))
        offer = result.scalar_one_or_none()
        if offer is None:
            raise ResourceNotFoundError("Offer", str(offer_id))
        return offer

    async def get_by_item(self, request_id: ItemId) -> list[Offer]:
        async with guarded_read(self.db, "list offers for request"):
            result = await self.db.execute(
                select(Offer).where(Offer.request_id == request_id)
                .order_by(Offer.created_at),
            )
        return list(result.scalars().all())

    async def get_by_offerer(self, offerer_id: UserId) -> list[Offer]:
        async with guarded_read(self.db, "list offers by offerer"):
            result = await self.db.execute(
                select(Offer).where(Offer.offerer_id == offerer_id)
                .order_by(Offer.created_at.desc()),
            )
        return list(result.scalars().all())

    async def list_all(self) -> list[Offer]:
        async with guarded_read(self.db, "list offers"):
            result = await self.db.execute(
                select(Offer).order_by(Offer.created_at.desc()),
            )
        return list(result.scalars().all())

    async def edit(self, offer_id: OfferId, fields: dict[str, Any]) -> Offer:
        offer = await self.get_by_id(offer_id)
        async with unit_of_work(self.db, "edit offer"):
            for key in _EDITABLE:
                if fields.get(key) is not None:
                    setattr(offer, key, fields[key])
        return offer

    async def accept(self, offer_id: OfferId) -> None:
        await self._transition(offer_id, OfferState.ACCEPTED)

    async def remove(self, offer_id: OfferId) -> None:
        await self._transition(offer_id, OfferState.REMOVED)

    async def remove_all_for_item(self, request_id: ItemId) -> None:
        async with unit_of_work(self.db, "remove offers for request"):
            await self.db.execute(
                delete(Offer).where(Offer.request_id == request_id),
            )

    async def assert_offerer_is(self, offer_id: OfferId, user_id: UserId) -> None:
        offer = await self.get_by_id(offer_id)
        if offer.offerer_id != user_id:
            raise NotAllowedError(
                "User is not the author of this offer",
                ErrorContext(item_id=str(offer.request_id), user_id=str(user_id)),
            )

    async def _transition(self, offer_id: OfferId, target: OfferState) -> None:
        offer = await self.get_by_id(offer_id)
        if offer.state != OfferState.ACTIVE.value:
            raise OfferStateError(str(offer_id), offer.state, target.value)
        async with unit_of_work(self.db, f"mark offer {target.value}"):
            offer.state = target.value
