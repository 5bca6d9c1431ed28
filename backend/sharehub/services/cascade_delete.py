"""Cascade Deletion — remove an item and everything in other stores that points at it.

Invariants:
    - Author check first: NotFound / NotAllowed surface before any write
    - Order: expiration record -> offers (requests only) -> item
    - Expiration cleanup is best-effort: absent record is fine, a failing
      lookup/delete is logged and deletion continues
    - Offer removal must succeed before the request is deleted, so no live
      offer ever references a deleted request; if it fails nothing else is
      deleted and a retry is safe (every step is idempotent)
    - Tag associations are left in place
"""

import logging

from sharehub.core.domain_types import ItemId, ItemKind, UserId
from sharehub.core.repository_protocols import StoreProvider
from sharehub.services.saga import SagaStep, run_saga

logger = logging.getLogger(__name__)


class CascadeDeletion:
    """Deletes Listings and Requests with their dependent records."""

    def __init__(self, stores: StoreProvider):
        self.stores = stores

    async def delete_item(
        self, kind: ItemKind, item_id: ItemId, requesting_user: UserId,
    ) -> None:
        items = self.stores.items(kind)
        await items.assert_author_is(item_id, requesting_user)

        steps = [
            SagaStep(
                "expiration",
                lambda r: self._drop_expiration(kind, item_id),
                required=False,
            ),
        ]
        if kind is ItemKind.REQUEST:
            steps.append(SagaStep(
                "offers", lambda r: self.stores.offers.remove_all_for_item(item_id),
            ))
        steps.append(SagaStep("item", lambda r: items.delete(item_id)))

        await run_saga(
            f"delete {kind.value}", steps,
            {"item_id": str(item_id), "item_kind": kind.value},
        )
        logger.info(
            f"Deleted {kind.value} and its dependents",
            extra={"item_id": str(item_id), "item_kind": kind.value},
        )

    async def _drop_expiration(self, kind: ItemKind, item_id: ItemId) -> bool:
        expirations = self.stores.expirations(kind)
        record = await expirations.get_by_item(item_id)
        if record is None:
            logger.debug(
                f"No expiration record for {kind.value}",
                extra={"item_id": str(item_id), "item_kind": kind.value},
            )
            return False
        await expirations.delete(record.id)
        return True
