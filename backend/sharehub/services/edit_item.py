"""Item Editing — edits, author hides, and expiration retargeting.

Invariants:
    - Only the author may edit, hide, or retarget an item's expiration
    - edit_item: the item edit must succeed; the expiration upsert that follows
      is best-effort (logged, the edit still succeeds)
    - hide_item only ever hides; there is no unhide path
"""

import logging
from typing import Any

from sharehub.core.domain_types import ExpirationId, ItemId, ItemKind, UserId
from sharehub.core.expiration import DEFAULT_EXPIRATION_TIME
from sharehub.core.repository_protocols import (
    ExpirationLike, ItemLike, StoreProvider,
)
from sharehub.services.saga import SagaStep, run_saga

logger = logging.getLogger(__name__)


class ItemEditing:
    """Author-side changes to existing Listings and Requests."""

    def __init__(self, stores: StoreProvider):
        self.stores = stores

    async def edit_item(
        self,
        kind: ItemKind,
        item_id: ItemId,
        user_id: UserId,
        fields: dict[str, Any],
        expire_date: str | None = None,
        expire_time: str = DEFAULT_EXPIRATION_TIME,
    ) -> ItemLike:
        items = self.stores.items(kind)
        await items.assert_author_is(item_id, user_id)

        steps = [SagaStep("item", lambda r: items.edit(item_id, fields))]
        if expire_date:
            steps.append(SagaStep(
                "expiration",
                lambda r: self.stores.expirations(kind).allocate(
                    item_id, expire_date, expire_time,
                ),
                required=False,
            ))
        outcome = await run_saga(
            f"edit {kind.value}", steps,
            {"item_id": str(item_id), "item_kind": kind.value},
        )
        if outcome.skipped:
            return await items.get_by_id(item_id)
        return outcome.results["item"]

    async def hide_item(self, kind: ItemKind, item_id: ItemId, user_id: UserId) -> ItemLike:
        items = self.stores.items(kind)
        await items.assert_author_is(item_id, user_id)
        await items.set_hidden(item_id)
        return await items.get_by_id(item_id)

    async def edit_expiration(
        self,
        kind: ItemKind,
        record_id: ExpirationId,
        user_id: UserId,
        expire_date: str,
        expire_time: str = DEFAULT_EXPIRATION_TIME,
    ) -> ExpirationLike:
        expirations = self.stores.expirations(kind)
        record = await expirations.get_by_id(record_id)
        await self.stores.items(kind).assert_author_is(record.item_id, user_id)
        return await expirations.edit(record_id, expire_date, expire_time)
