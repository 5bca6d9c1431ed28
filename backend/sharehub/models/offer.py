"""Offer ORM — a user's proposal to fulfil a request.

Invariants:
    - request_id references a Request by id (no FK: separate concept store)
    - state transitions: active -> accepted (once) | active -> removed
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from sharehub.db.base import Base


class Offer(Base):
    """Offer entity — fulfilment proposal on a request."""
    __tablename__ = "offers"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    request_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    offerer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    location: Mapped[str] = mapped_column(String(500), nullable=False)
    image: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    state: Mapped[str] = mapped_column(
        String(20), nullable=False, default="active",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
