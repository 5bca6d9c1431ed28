"""Creation saga — item + expiration record as one logical write.

Invariants:
    - Success: item exists, its expiration record points at it
    - Expiration failure: item deleted, original error raised, no record left
    - Tag failures are reported in `untagged`, never roll the item back
    - Invalid date/time rejected before any store write
"""

from datetime import datetime
from uuid import uuid4

import pytest

from sharehub.core.domain_types import ItemKind
from sharehub.core.errors import DatabaseError, ItemValidationError
from sharehub.services.create_with_expiration import CreationSaga


@pytest.mark.parametrize("kind", list(ItemKind))
async def test_creates_item_and_expiration(fake_stores, kind):
    owner = uuid4()
    result = await CreationSaga(fake_stores).create_with_expiration(
        kind, owner, {"name": "Chair"}, "2024-01-01", "09:30",
    )
    assert result.item.id in fake_stores.items(kind).rows
    assert result.item.author_id == owner
    assert result.expiration.item_id == result.item.id
    assert result.expiration.expires_at == datetime(2024, 1, 1, 9, 30)
    assert result.untagged == []


async def test_expiration_failure_deletes_item_and_reraises(fake_stores):
    expirations = fake_stores.expirations(ItemKind.LISTING)
    boom = DatabaseError("insert failed", "allocate listing expiration")
    expirations.fail("allocate", boom)

    with pytest.raises(DatabaseError) as exc_info:
        await CreationSaga(fake_stores).create_with_expiration(
            ItemKind.LISTING, uuid4(), {"name": "Chair"}, "2024-01-01",
        )

    assert exc_info.value is boom
    assert fake_stores.items(ItemKind.LISTING).rows == {}
    assert expirations.rows == {}
    assert fake_stores.items(ItemKind.LISTING).calls == ["create", "delete"]


async def test_failed_compensation_still_raises_expiration_error(fake_stores):
    items = fake_stores.items(ItemKind.REQUEST)
    fake_stores.expirations(ItemKind.REQUEST).fail("allocate", DatabaseError("x", "allocate"))
    items.fail("delete", RuntimeError("delete failed too"))

    with pytest.raises(DatabaseError):
        await CreationSaga(fake_stores).create_with_expiration(
            ItemKind.REQUEST, uuid4(), {"name": "Pump"}, "2024-01-01",
        )
    # Orphan stays; the sweep never sees it because it has no expiration record
    assert len(items.rows) == 1


async def test_item_failure_writes_nothing(fake_stores):
    fake_stores.items(ItemKind.LISTING).fail("create", DatabaseError("x", "create"))

    with pytest.raises(DatabaseError):
        await CreationSaga(fake_stores).create_with_expiration(
            ItemKind.LISTING, uuid4(), {"name": "Chair"}, "2024-01-01",
        )
    assert fake_stores.expirations(ItemKind.LISTING).calls == []


@pytest.mark.parametrize("date,time,field", [
    ("2024-13-01", "00:00", "expire_date"),
    ("not-a-date", "00:00", "expire_date"),
    ("2024-01-01", "25:00", "expire_time"),
    ("2024-01-01", "noon", "expire_time"),
])
async def test_invalid_expiration_rejected_before_any_write(fake_stores, date, time, field):
    with pytest.raises(ItemValidationError) as exc_info:
        await CreationSaga(fake_stores).create_with_expiration(
            ItemKind.LISTING, uuid4(), {"name": "Chair"}, date, time,
        )
    assert exc_info.value.field == field
    assert fake_stores.items(ItemKind.LISTING).calls == []


async def test_tags_attached_once_each(fake_stores):
    result = await CreationSaga(fake_stores).create_with_expiration(
        ItemKind.LISTING, uuid4(), {"name": "Chair"}, "2024-01-01",
        tags=["Furniture", "furniture ", "free", ""],
    )
    labels = [label for _, _, label in fake_stores.tags.links]
    assert labels == ["furniture", "free"]
    assert all(item_id == result.item.id for item_id, _, _ in fake_stores.tags.links)


async def test_tag_failure_keeps_item_and_reports_label(fake_stores):
    fake_stores.tags.fail("tag_item", RuntimeError("tag store down"))

    result = await CreationSaga(fake_stores).create_with_expiration(
        ItemKind.REQUEST, uuid4(), {"name": "Pump"}, "2024-01-01", tags=["bikes"],
    )
    assert result.item.id in fake_stores.items(ItemKind.REQUEST).rows
    assert result.expiration is not None
    assert result.untagged == ["bikes"]
