"""Initial schema — items, expiration records, offers, claims, reviews, tags, reports.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

No foreign keys between concept stores: each table is owned by one store and
cross-store references are plain UUID columns kept consistent by the
coordinators. The only FK is item_tags -> tags, inside the tag store.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "listings",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("author_id", UUID(as_uuid=True), nullable=False, index=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("meetup_location", sa.String(500), nullable=False),
        sa.Column("image", sa.String(2000), nullable=True),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="1"),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("hidden", sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "requests",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("author_id", UUID(as_uuid=True), nullable=False, index=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="1"),
        sa.Column("image", sa.String(2000), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("hidden", sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "expiration_records",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("item_id", UUID(as_uuid=True), nullable=False),
        sa.Column("item_kind", sa.String(20), nullable=False),
        sa.Column("expire_date", sa.String(10), nullable=False),
        sa.Column("expire_time", sa.String(5), nullable=False, server_default="00:00"),
        sa.Column("expires_at", sa.DateTime, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("item_kind", "item_id", name="uq_expiration_item"),
    )
    op.create_index(
        "ix_expiration_kind_expires_at", "expiration_records",
        ["item_kind", "expires_at"],
    )
    op.create_table(
        "offers",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("request_id", UUID(as_uuid=True), nullable=False, index=True),
        sa.Column("offerer_id", UUID(as_uuid=True), nullable=False, index=True),
        sa.Column("location", sa.String(500), nullable=False),
        sa.Column("image", sa.String(2000), nullable=True),
        sa.Column("message", sa.Text, nullable=True),
        sa.Column("state", sa.String(20), nullable=False, server_default="active"),
        *_timestamps(),
    )
    op.create_table(
        "claims",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("listing_id", UUID(as_uuid=True), nullable=False, index=True),
        sa.Column("claimer_id", UUID(as_uuid=True), nullable=False, index=True),
        sa.Column("quantity", sa.Integer, nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "reviews",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("author_id", UUID(as_uuid=True), nullable=False),
        sa.Column("subject_id", UUID(as_uuid=True), nullable=False, index=True),
        sa.Column("rating", sa.Integer, nullable=False),
        sa.Column("message", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "tags",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("label", sa.String(100), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_table(
        "item_tags",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "tag_id", UUID(as_uuid=True),
            sa.ForeignKey("tags.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("item_id", UUID(as_uuid=True), nullable=False, index=True),
        sa.Column("item_kind", sa.String(20), nullable=False),
        sa.UniqueConstraint("tag_id", "item_id", name="uq_item_tag"),
    )
    op.create_table(
        "reports",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("reporter_id", UUID(as_uuid=True), nullable=False),
        sa.Column("reported_id", UUID(as_uuid=True), nullable=False, index=True),
        sa.Column("message", sa.Text, nullable=True),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table("reports")
    op.drop_table("item_tags")
    op.drop_table("tags")
    op.drop_table("reviews")
    op.drop_table("claims")
    op.drop_table("offers")
    op.drop_index("ix_expiration_kind_expires_at", table_name="expiration_records")
    op.drop_table("expiration_records")
    op.drop_table("requests")
    op.drop_table("listings")
