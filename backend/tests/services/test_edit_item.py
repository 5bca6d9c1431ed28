"""Item editing — author edits, hides, and expiration retargeting."""

from datetime import datetime
from uuid import uuid4

import pytest

from sharehub.core.domain_types import ItemKind
from sharehub.core.errors import DatabaseError, NotAllowedError
from sharehub.services.edit_item import ItemEditing


async def test_edit_updates_fields_and_upserts_expiration(fake_stores):
    owner = uuid4()
    listing = fake_stores.items(ItemKind.LISTING).add(owner)

    edited = await ItemEditing(fake_stores).edit_item(
        ItemKind.LISTING, listing.id, owner, {"name": "Sofa"},
        expire_date="2024-03-01", expire_time="08:00",
    )

    assert edited.name == "Sofa"
    record = await fake_stores.expirations(ItemKind.LISTING).get_by_item(listing.id)
    assert record.expires_at == datetime(2024, 3, 1, 8, 0)


async def test_edit_retargets_existing_record_without_duplicating(fake_stores):
    owner = uuid4()
    request = fake_stores.items(ItemKind.REQUEST).add(owner)
    expirations = fake_stores.expirations(ItemKind.REQUEST)
    original = expirations.add(request.id, "2024-01-01")

    await ItemEditing(fake_stores).edit_item(
        ItemKind.REQUEST, request.id, owner, {}, expire_date="2024-05-05",
    )

    assert list(expirations.rows) == [original.id]
    assert original.expire_date == "2024-05-05"


async def test_expiration_failure_does_not_undo_edit(fake_stores):
    owner = uuid4()
    listing = fake_stores.items(ItemKind.LISTING).add(owner)
    fake_stores.expirations(ItemKind.LISTING).fail("allocate", DatabaseError("x", "allocate"))

    edited = await ItemEditing(fake_stores).edit_item(
        ItemKind.LISTING, listing.id, owner, {"name": "Stool"}, expire_date="2024-03-01",
    )
    assert edited.name == "Stool"


async def test_non_author_cannot_edit(fake_stores):
    listing = fake_stores.items(ItemKind.LISTING).add(uuid4())

    with pytest.raises(NotAllowedError):
        await ItemEditing(fake_stores).edit_item(
            ItemKind.LISTING, listing.id, uuid4(), {"name": "Mine now"},
        )
    assert listing.name == "Chair"


async def test_hide_is_author_only_and_one_way(fake_stores):
    owner = uuid4()
    request = fake_stores.items(ItemKind.REQUEST).add(owner)
    editing = ItemEditing(fake_stores)

    with pytest.raises(NotAllowedError):
        await editing.hide_item(ItemKind.REQUEST, request.id, uuid4())
    assert request.hidden is False

    hidden = await editing.hide_item(ItemKind.REQUEST, request.id, owner)
    again = await editing.hide_item(ItemKind.REQUEST, request.id, owner)
    assert hidden.hidden is True
    assert again.hidden is True


async def test_edit_expiration_checks_item_author(fake_stores):
    owner = uuid4()
    listing = fake_stores.items(ItemKind.LISTING).add(owner)
    record = fake_stores.expirations(ItemKind.LISTING).add(listing.id, "2024-01-01")
    editing = ItemEditing(fake_stores)

    with pytest.raises(NotAllowedError):
        await editing.edit_expiration(ItemKind.LISTING, record.id, uuid4(), "2025-01-01")

    edited = await editing.edit_expiration(
        ItemKind.LISTING, record.id, owner, "2025-01-01", "18:45",
    )
    assert edited.expires_at == datetime(2025, 1, 1, 18, 45)
