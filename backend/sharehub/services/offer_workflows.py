"""Offer Workflows — making, editing, withdrawing and accepting offers on requests.

Invariants:
    - An offer can only be made on an existing, visible request, and not by its author
    - accept_offer: fetch offer -> hide parent request -> mark offer accepted;
      both writes are attempted once the offer is found
    - accept_offer never touches sibling offers on the same request
    - Only the offerer may edit or withdraw an offer

Design Decisions:
    - Hide before accept: if the accept write fails the request is merely hidden
      early (hidden is monotonic and harmless), never accepted-but-visible
    - The offer state is not pre-checked: accepting a removed or accepted offer
      still hides the request before OfferStateError surfaces
    - The accepting user is not checked against the request author; see DESIGN.md
"""

import logging
from typing import Any

from sharehub.core.domain_types import ItemId, ItemKind, OfferId, UserId
from sharehub.core.errors import ErrorContext, NotAllowedError
from sharehub.core.repository_protocols import OfferLike, StoreProvider

logger = logging.getLogger(__name__)


class OfferWorkflows:
    """Offer operations that touch the request store as well as the offer store."""

    def __init__(self, stores: StoreProvider):
        self.stores = stores

    async def make_offer(
        self, offerer_id: UserId, request_id: ItemId, fields: dict[str, Any],
    ) -> OfferLike:
        request = await self.stores.items(ItemKind.REQUEST).get_by_id(request_id)
        ctx = ErrorContext(item_id=str(request_id), item_kind=ItemKind.REQUEST.value)
        if request.author_id == offerer_id:
            raise NotAllowedError("Users cannot offer on their own request", ctx)
        if request.hidden:
            raise NotAllowedError("Request is no longer accepting offers", ctx)
        return await self.stores.offers.create(offerer_id, request_id, fields)

    async def accept_offer(self, offer_id: OfferId, accepting_user: UserId) -> dict:
        offer = await self.stores.offers.get_by_id(offer_id)
        await self.stores.items(ItemKind.REQUEST).set_hidden(offer.request_id)
        await self.stores.offers.accept(offer_id)
        logger.info(
            "Offer accepted; request hidden",
            extra={"offer_id": str(offer_id), "item_id": str(offer.request_id)},
        )
        return {}

    async def edit_offer(
        self, offer_id: OfferId, user_id: UserId, fields: dict[str, Any],
    ) -> OfferLike:
        await self.stores.offers.assert_offerer_is(offer_id, user_id)
        return await self.stores.offers.edit(offer_id, fields)

    async def withdraw_offer(self, offer_id: OfferId, user_id: UserId) -> None:
        await self.stores.offers.assert_offerer_is(offer_id, user_id)
        await self.stores.offers.remove(offer_id)
