"""Creation Saga — item + expiration record (+ tags) as one logical write.

Invariants:
    - On success the item exists and its expiration record points at it with
      the requested target instant
    - If the expiration write fails the item is deleted and the original error
      is raised; callers never observe a half-created item
    - Tag associations are best-effort: logged on failure, never rolled back
    - The expiration date/time is validated before any write happens
    - Later steps and the compensation use the item id captured at creation,
      never the ORM row (a rolled-back write expires it)

Design Decisions:
    - Steps declared as SagaStep list (services/saga.py): the same rollback
      path as claiming and editing
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from sharehub.core.domain_types import ItemId, ItemKind, UserId
from sharehub.core.expiration import DEFAULT_EXPIRATION_TIME, parse_expiration
from sharehub.core.repository_protocols import (
    ExpirationLike, ItemLike, StoreProvider,
)
from sharehub.services.saga import SagaStep, run_saga

logger = logging.getLogger(__name__)


@dataclass
class CreationResult:
    item: ItemLike
    expiration: ExpirationLike
    untagged: list[str] = field(default_factory=list)


class CreationSaga:
    """Creates Listings and Requests together with their expiration records."""

    def __init__(self, stores: StoreProvider):
        self.stores = stores

    async def create_with_expiration(
        self,
        kind: ItemKind,
        owner_id: UserId,
        fields: dict[str, Any],
        expire_date: str,
        expire_time: str = DEFAULT_EXPIRATION_TIME,
        tags: Iterable[str] = (),
    ) -> CreationResult:
        parse_expiration(expire_date, expire_time)
        items = self.stores.items(kind)
        expirations = self.stores.expirations(kind)
        created: list[ItemId] = []

        async def create_item(r):
            item = await items.create(owner_id, fields)
            created.append(item.id)
            return item

        async def delete_item(_) -> None:
            await items.delete(created[0])

        steps = [
            SagaStep("item", create_item, compensation=delete_item),
            SagaStep(
                "expiration",
                lambda r: expirations.allocate(created[0], expire_date, expire_time),
            ),
        ]
        labels = list(dict.fromkeys(t.strip() for t in tags if t and t.strip()))
        for label in labels:
            steps.append(SagaStep(
                f"tag:{label}",
                lambda r, label=label: self.stores.tags.tag_item(created[0], kind, label),
                required=False,
            ))

        outcome = await run_saga(
            f"create {kind.value}", steps, {"item_kind": kind.value},
        )
        item, record = outcome.results["item"], outcome.results["expiration"]
        if outcome.skipped:
            # a failed tag write rolled the session back; reload both rows
            item = await items.get_by_id(created[0])
            record = await expirations.get_by_item(created[0])
        logger.info(
            f"Created {kind.value} with expiration {expire_date} {expire_time}",
            extra={"item_id": str(created[0]), "item_kind": kind.value},
        )
        return CreationResult(
            item=item,
            expiration=record,
            untagged=[name.split(":", 1)[1] for name in outcome.skipped],
        )
