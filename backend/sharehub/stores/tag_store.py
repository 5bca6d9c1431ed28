"""Tag Store — tag labels and item associations.

Invariants:
    - create_tag is idempotent: an existing label is returned as-is
    - tag_item creates the label on first use and never duplicates a link
    - Labels are stored trimmed and lower-cased
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sharehub.core.domain_types import ItemId, ItemKind
from sharehub.core.errors import ItemValidationError
from sharehub.models.tag import ItemTag, Tag
from sharehub.stores.unit_of_work import guarded_read, unit_of_work


def normalize_label(label: str) -> str:
    cleaned = (label or "").strip().lower()
    if not cleaned:
        raise ItemValidationError("Tag label cannot be empty", "tag")
    return cleaned


class SqlTagStore:
    """Tag persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_tag(self, label: str) -> Tag:
        cleaned = normalize_label(label)
        tag = await self._find(cleaned)
        if tag is not None:
            return tag
        tag = Tag(label=cleaned)
        async with unit_of_work(self.db, "create tag"):
            self.db.add(tag)
        return tag

    async def tag_item(self, item_id: ItemId, item_kind: ItemKind, label: str) -> None:
        tag = await self.create_tag(label)
        async with guarded_read(self.db, "get item tag"):
            existing = await self.db.execute(
                select(ItemTag)
                .where(ItemTag.tag_id == tag.id)
                .where(ItemTag.item_id == item_id),
            )
        if existing.scalar_one_or_none() is not None:
            return
        async with unit_of_work(self.db, "tag item"):
            self.db.add(ItemTag(tag_id=tag.id, item_id=item_id, item_kind=item_kind.value))

    async def get_items_with_tag(self, label: str) -> list[dict]:
        async with guarded_read(self.db, "list items with tag"):
            result = await self.db.execute(
                select(ItemTag)
                .join(Tag, ItemTag.tag_id == Tag.id)
                .where(Tag.label == normalize_label(label)),
            )
        return [
            {"item_id": str(link.item_id), "item_kind": link.item_kind}
            for link in result.scalars().all()
        ]

    async def _find(self, label: str) -> Tag | None:
        async with guarded_read(self.db, "get tag"):
            result = await self.db.execute(select(Tag).where(Tag.label == label))
        return result.scalar_one_or_none()
