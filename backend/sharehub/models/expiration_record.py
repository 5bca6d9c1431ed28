"""ExpirationRecord ORM — pairs an item with the instant it must be hidden.

Invariants:
    - At most one record per (item_kind, item_id) — enforced by unique constraint
    - expires_at is derived from expire_date + expire_time, stored as naive UTC
    - Deleted once consumed by the sweep or when its item is deleted

Design Decisions:
    - One table for both item kinds, discriminated by item_kind: the store is
      parameterized by kind instead of duplicated per kind
    - (item_kind, expires_at) index: the sweep's only query is a range scan on it
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from sharehub.db.base import Base


class ExpirationRecord(Base):
    """Expiration side record for a Listing or Request."""
    __tablename__ = "expiration_records"
    __table_args__ = (
        UniqueConstraint("item_kind", "item_id", name="uq_expiration_item"),
        Index("ix_expiration_kind_expires_at", "item_kind", "expires_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    item_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False,
    )
    item_kind: Mapped[str] = mapped_column(String(20), nullable=False)
    expire_date: Mapped[str] = mapped_column(String(10), nullable=False)
    expire_time: Mapped[str] = mapped_column(
        String(5), nullable=False, default="00:00",
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
