"""Tag ORM — labels and their many-to-many links to items.

Invariants:
    - Tag.label is unique
    - ItemTag links survive item deletion (cascade deletion does not touch tags)

Design Decisions:
    - ON DELETE CASCADE only inside the tag store (tags -> item_tags); items
      are referenced by id + kind, never by FK
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from sharehub.db.base import Base


class Tag(Base):
    """Tag label."""
    __tablename__ = "tags"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    label: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    links: Mapped[list["ItemTag"]] = relationship(
        "ItemTag", back_populates="tag", cascade="all, delete-orphan",
        lazy="selectin",
    )


class ItemTag(Base):
    """Association between a tag and a Listing or Request."""
    __tablename__ = "item_tags"
    __table_args__ = (
        UniqueConstraint("tag_id", "item_id", name="uq_item_tag"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    tag_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("tags.id", ondelete="CASCADE"),
        nullable=False,
    )
    item_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    item_kind: Mapped[str] = mapped_column(String(20), nullable=False)

    tag: Mapped["Tag"] = relationship("Tag", back_populates="links")
