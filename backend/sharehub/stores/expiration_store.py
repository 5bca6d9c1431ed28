"""Expiration Store — expiration records for one item kind.

Invariants:
    - At most one record per item: allocate() on an item that already has a
      record updates it in place instead of inserting a duplicate
    - delete() of a missing record is a no-op (sweep and cascade re-runs are safe)
    - get_all_expired(now) returns records with expires_at <= now, oldest first

Design Decisions:
    - Parameterized by ItemKind over one table: Listing and Request expirations
      share every line of code
"""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sharehub.core.domain_types import ExpirationId, ItemId, ItemKind
from sharehub.core.errors import ErrorContext, ResourceNotFoundError
from sharehub.core.expiration import (
    DEFAULT_EXPIRATION_TIME, as_naive_utc, parse_expiration,
)
from sharehub.models.expiration_record import ExpirationRecord
from sharehub.stores.unit_of_work import guarded_read, unit_of_work

logger = logging.getLogger(__name__)


class SqlExpirationStore:
    """Expiration records scoped to a single item kind."""

    def __init__(self, db: AsyncSession, kind: ItemKind):
        self.db = db
        self.kind = kind

    async def allocate(
        self, item_id: ItemId, expire_date: str,
        expire_time: str = DEFAULT_EXPIRATION_TIME,
    ) -> ExpirationRecord:
        """Create the item's record, or retarget the existing one."""
        expires_at = parse_expiration(expire_date, expire_time)
        record = await self.get_by_item(item_id)
        async with unit_of_work(self.db, f"allocate {self.kind.value} expiration"):
            if record is None:
                record = ExpirationRecord(
                    item_id=item_id, item_kind=self.kind.value,
                    expire_date=expire_date, expire_time=expire_time,
                    expires_at=expires_at,
                )
                self.db.add(record)
            else:
                record.expire_date = expire_date
                record.expire_time = expire_time
                record.expires_at = expires_at
        return record

    async def get_by_id(self, record_id: ExpirationId) -> ExpirationRecord:
        record = await self._find(record_id)
        if record is None:
            raise ResourceNotFoundError(
                "ExpirationRecord", str(record_id),
                ErrorContext(item_kind=self.kind.value),
            )
        return record

    async def get_by_item(self, item_id: ItemId) -> ExpirationRecord | None:
        async with guarded_read(self.db, f"get {self.kind.value} expiration"):
            result = await self.db.execute(
                select(ExpirationRecord)
                .where(ExpirationRecord.item_kind == self.kind.value)
                .where(ExpirationRecord.item_id == item_id),
            )
        return result.scalar_one_or_none()

    async def edit(
        self, record_id: ExpirationId, expire_date: str,
        expire_time: str = DEFAULT_EXPIRATION_TIME,
    ) -> ExpirationRecord:
        expires_at = parse_expiration(expire_date, expire_time)
        record = await self.get_by_id(record_id)
        async with unit_of_work(self.db, f"edit {self.kind.value} expiration"):
            record.expire_date = expire_date
            record.expire_time = expire_time
            record.expires_at = expires_at
        return record

    async def delete(self, record_id: ExpirationId) -> None:
        record = await self._find(record_id)
        if record is None:
            return
        async with unit_of_work(self.db, f"delete {self.kind.value} expiration"):
            await self.db.delete(record)

    async def get_all_expired(self, now: datetime) -> list[ExpirationRecord]:
        async with guarded_read(self.db, f"list expired {self.kind.value}s"):
            result = await self.db.execute(
                select(ExpirationRecord)
                .where(ExpirationRecord.item_kind == self.kind.value)
                .where(ExpirationRecord.expires_at <= as_naive_utc(now))
                .order_by(ExpirationRecord.expires_at),
            )
        return list(result.scalars().all())

    async def _find(self, record_id: ExpirationId) -> ExpirationRecord | None:
        async with guarded_read(self.db, f"get {self.kind.value} expiration"):
            result = await self.db.execute(
                select(ExpirationRecord)
                .where(ExpirationRecord.id == record_id)
                .where(ExpirationRecord.item_kind == self.kind.value),
            )
        return result.scalar_one_or_none()
