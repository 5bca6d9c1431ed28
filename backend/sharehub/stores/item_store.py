"""Item Stores — Listing and Request persistence behind one generic implementation.

Invariants:
    - get_by_id raises ResourceNotFoundError for unknown ids
    - set_hidden only ever writes hidden=True (idempotent, monotonic)
    - edit ignores None values and unknown fields; it never touches `hidden`
    - create/edit validate name (non-blank) and quantity (>= 0 on edit, >= 1 on create)

Design Decisions:
    - SqlItemStore parameterized by ORM model + ItemKind: both kinds satisfy the
      same ItemStore protocol, so coordinators are written once
"""

import logging
from datetime import datetime, timezone
from typing import Any, ClassVar

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from sharehub.core.domain_types import ItemId, ItemKind, UserId
from sharehub.core.errors import (
    ErrorContext, ItemValidationError, NotAllowedError, ResourceNotFoundError,
)
from sharehub.models.listing import Listing
from sharehub.models.request import Request as RequestModel
from sharehub.stores.unit_of_work import guarded_read, unit_of_work

logger = logging.getLogger(__name__)


class SqlItemStore:
    """Generic item store — subclasses pick the model, kind, and editable fields."""

    model: ClassVar[type]
    kind: ClassVar[ItemKind]
    editable_fields: ClassVar[tuple[str, ...]]

    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    def label(self) -> str:
        return self.kind.value.capitalize()

    def _context(self, item_id: ItemId | None = None) -> ErrorContext:
        return ErrorContext(
            item_id=str(item_id) if item_id else None, item_kind=self.kind.value,
        )

    def _clean(self, fields: dict[str, Any], creating: bool) -> dict[str, Any]:
        values = {
            k: v for k, v in fields.items()
            if k in self.editable_fields and v is not None
        }
        if "name" in values or creating:
            name = (values.get("name") or "").strip()
            if not name:
                raise ItemValidationError(
                    f"{self.label} name cannot be empty", "name", self._context(),
                )
            values["name"] = name
        if "quantity" in values:
            minimum = 1 if creating else 0
            if values["quantity"] < minimum:
                raise ItemValidationError(
                    f"{self.label} quantity must be at least {minimum}",
                    "quantity", self._context(),
                )
        return values

    async def create(self, owner_id: UserId, fields: dict[str, Any]):
        item = self.model(author_id=owner_id, **self._clean(fields, creating=True))
        async with unit_of_work(self.db, f"create {self.kind.value}"):
            self.db.add(item)
        logger.info(
            f"{self.label} created", extra={"item_id": str(item.id), "item_kind": self.kind.value},
        )
        return item

    async def get_by_id(self, item_id: ItemId):
        async with guarded_read(self.db, f"get {self.kind.value}"):
            result = await self.db.execute(
                select(self.model).where(self.model.id == item_id),
            )
        item = result.scalar_one_or_none()
        if item is None:
            raise ResourceNotFoundError(self.label, str(item_id), self._context(item_id))
        return item

    async def get_by_author(self, owner_id: UserId) -> list:
        async with guarded_read(self.db, f"list {self.kind.value}s by author"):
            result = await self.db.execute(
                select(self.model)
                .where(self.model.author_id == owner_id)
                .order_by(self.model.created_at.desc()),
            )
        return list(result.scalars().all())

    async def list_all(self) -> list:
        async with guarded_read(self.db, f"list {self.kind.value}s"):
            result = await self.db.execute(
                select(self.model).order_by(self.model.created_at.desc()),
            )
        return list(result.scalars().all())

    async def count_by_author(self, owner_id: UserId) -> int:
        async with guarded_read(self.db, f"count {self.kind.value}s"):
            result = await self.db.execute(
                select(func.count()).select_from(self.model)
                .where(self.model.author_id == owner_id),
            )
        return result.scalar_one()

    async def edit(self, item_id: ItemId, fields: dict[str, Any]):
        item = await self.get_by_id(item_id)
        values = self._clean(fields, creating=False)
        async with unit_of_work(self.db, f"edit {self.kind.value}"):
            for key, value in values.items():
                setattr(item, key, value)
            item.updated_at = datetime.now(timezone.utc)
        return item

    async def delete(self, item_id: ItemId) -> None:
        item = await self.get_by_id(item_id)
        async with unit_of_work(self.db, f"delete {self.kind.value}"):
            await self.db.delete(item)

    async def set_hidden(self, item_id: ItemId) -> None:
        item = await self.get_by_id(item_id)
        if item.hidden:
            return
        async with unit_of_work(self.db, f"hide {self.kind.value}"):
            item.hidden = True
            item.updated_at = datetime.now(timezone.utc)

    async def assert_author_is(self, item_id: ItemId, user_id: UserId) -> None:
        item = await self.get_by_id(item_id)
        if item.author_id != user_id:
            raise NotAllowedError(
                f"User is not the author of this {self.kind.value}",
                self._context(item_id),
            )


class ListingStore(SqlItemStore):
    model = Listing
    kind = ItemKind.LISTING
    editable_fields = (
        "name", "meetup_location", "image", "quantity", "description",
    )

    def _clean(self, fields: dict[str, Any], creating: bool) -> dict[str, Any]:
        values = super()._clean(fields, creating)
        if creating and not (values.get("meetup_location") or "").strip():
            raise ItemValidationError(
                "Listing meetup_location cannot be empty", "meetup_location",
                self._context(),
            )
        return values


class RequestStore(SqlItemStore):
    model = RequestModel
    kind = ItemKind.REQUEST
    editable_fields = ("name", "quantity", "image", "description")
