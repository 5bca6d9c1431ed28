"""Expiration Sweep — hide every expired item and consume its expiration record.

Invariants:
    - Runs each ItemKind independently; a failed batch fetch for one kind does
      not stop the other
    - Per expired record: visible item -> hide, then delete record;
      hidden item -> delete record; missing item -> delete stale record
    - Per-record failures are logged and counted, never raised: one bad record
      cannot stall the rest of the batch
    - Safe to re-run: a consumed record is gone, so a second pass finds nothing
      and set_hidden is never called on an already hidden item
    - The batch is driven by (record id, item id) pairs copied out of the fetched
      rows: a rolled-back write expires every row in the session, and the rest
      of the batch must not touch them

Design Decisions:
    - Written against HideableItemStore + ExpirationStore, driven by ItemKind:
      no per-kind copy of the loop
    - Hide before delete: a crash between the two leaves a hidden item with a
      record, which the next tick purges (PURGE branch)
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from sharehub.core.domain_types import ExpirationId, ItemId, ItemKind, SweepAction
from sharehub.core.errors import ResourceNotFoundError
from sharehub.core.expiration import decide_sweep_action
from sharehub.core.repository_protocols import StoreProvider

logger = logging.getLogger(__name__)


@dataclass
class SweepReport:
    """Counters for one item kind in one sweep."""
    kind: ItemKind
    expired: int = 0
    hidden: int = 0
    purged: int = 0
    stale: int = 0
    failed: int = 0
    batch_failed: bool = False

    def record(self, action: SweepAction) -> None:
        if action is SweepAction.HIDE_AND_PURGE:
            self.hidden += 1
        elif action is SweepAction.PURGE:
            self.purged += 1
        else:
            self.stale += 1


class ExpirationSweep:
    """One pass over all expired records of every item kind."""

    def __init__(self, stores: StoreProvider):
        self.stores = stores

    async def run(self, now: datetime) -> list[SweepReport]:
        return [await self.sweep_kind(kind, now) for kind in self.stores.item_kinds()]

    async def sweep_kind(self, kind: ItemKind, now: datetime) -> SweepReport:
        report = SweepReport(kind=kind)
        try:
            records = await self.stores.expirations(kind).get_all_expired(now)
        except Exception as e:
            report.batch_failed = True
            logger.error(
                f"Could not fetch expired {kind.value} records: {e}",
                extra={"item_kind": kind.value}, exc_info=True,
            )
            return report

        report.expired = len(records)
        if not records:
            logger.debug(f"No expired {kind.value}s to process")
            return report

        logger.info(f"Found {len(records)} expired {kind.value}(s) to process")
        pending = [(record.id, record.item_id) for record in records]
        for record_id, item_id in pending:
            try:
                action = await self._process(kind, record_id, item_id)
            except Exception as e:
                report.failed += 1
                logger.error(
                    f"Error processing expired {kind.value}: {e}",
                    extra={
                        "item_id": str(item_id), "item_kind": kind.value,
                        "record_id": str(record_id),
                    },
                    exc_info=True,
                )
                continue
            report.record(action)

        logger.info(
            f"Completed expired {kind.value} processing",
            extra={
                "item_kind": kind.value, "hidden": report.hidden,
                "purged": report.purged, "stale": report.stale,
                "failed": report.failed,
            },
        )
        return report

    async def _process(
        self, kind: ItemKind, record_id: ExpirationId, item_id: ItemId,
    ) -> SweepAction:
        items = self.stores.items(kind)
        try:
            item = await items.get_by_id(item_id)
            hidden = item.hidden
        except ResourceNotFoundError:
            hidden = None

        action = decide_sweep_action(hidden)
        if action is SweepAction.HIDE_AND_PURGE:
            await items.set_hidden(item_id)
            logger.info(
                f"Hid expired {kind.value}",
                extra={"item_id": str(item_id), "item_kind": kind.value},
            )
        await self.stores.expirations(kind).delete(record_id)
        return action
