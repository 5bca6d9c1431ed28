"""Claim workflow — claiming units of a listing and giving them back.

Invariants:
    - Claim + quantity decrement together, or neither
    - Claiming the last unit hides the listing
    - Unclaim restores units but never unhides
"""

from uuid import uuid4

import pytest

from sharehub.core.domain_types import ItemKind
from sharehub.core.errors import (
    ClaimQuantityError, DatabaseError, ItemValidationError, NotAllowedError,
)
from sharehub.services.claim_listing import ClaimWorkflow


async def test_claim_decrements_quantity(fake_stores):
    listing = fake_stores.items(ItemKind.LISTING).add(uuid4(), quantity=5)
    claimer = uuid4()

    claim = await ClaimWorkflow(fake_stores).claim_listing(listing.id, claimer, 2)

    assert claim.quantity == 2
    assert claim.claimer_id == claimer
    assert listing.quantity == 3
    assert listing.hidden is False


async def test_claiming_last_units_hides_listing(fake_stores):
    listing = fake_stores.items(ItemKind.LISTING).add(uuid4(), quantity=2)

    await ClaimWorkflow(fake_stores).claim_listing(listing.id, uuid4(), 2)

    assert listing.quantity == 0
    assert listing.hidden is True


async def test_over_claim_rejected_without_writes(fake_stores):
    listing = fake_stores.items(ItemKind.LISTING).add(uuid4(), quantity=1)

    with pytest.raises(ClaimQuantityError) as exc_info:
        await ClaimWorkflow(fake_stores).claim_listing(listing.id, uuid4(), 3)

    assert exc_info.value.available == 1
    assert fake_stores.claims.rows == {}
    assert listing.quantity == 1


async def test_zero_quantity_rejected(fake_stores):
    listing = fake_stores.items(ItemKind.LISTING).add(uuid4(), quantity=1)

    with pytest.raises(ItemValidationError):
        await ClaimWorkflow(fake_stores).claim_listing(listing.id, uuid4(), 0)


async def test_hidden_listing_cannot_be_claimed(fake_stores):
    listing = fake_stores.items(ItemKind.LISTING).add(uuid4(), quantity=3, hidden=True)

    with pytest.raises(NotAllowedError):
        await ClaimWorkflow(fake_stores).claim_listing(listing.id, uuid4(), 1)


async def test_decrement_failure_removes_claim(fake_stores):
    listings = fake_stores.items(ItemKind.LISTING)
    listing = listings.add(uuid4(), quantity=3)
    listings.fail("edit", DatabaseError("x", "edit listing"))

    with pytest.raises(DatabaseError):
        await ClaimWorkflow(fake_stores).claim_listing(listing.id, uuid4(), 1)

    assert fake_stores.claims.rows == {}
    assert listing.quantity == 3


async def test_unclaim_restores_units_but_stays_hidden(fake_stores):
    listing = fake_stores.items(ItemKind.LISTING).add(uuid4(), quantity=1)
    claimer = uuid4()
    workflow = ClaimWorkflow(fake_stores)
    claim = await workflow.claim_listing(listing.id, claimer, 1)
    assert listing.hidden is True

    await workflow.unclaim(claim.id, claimer)

    assert fake_stores.claims.rows == {}
    assert listing.quantity == 1
    assert listing.hidden is True


async def test_only_claimer_may_unclaim(fake_stores):
    listing = fake_stores.items(ItemKind.LISTING).add(uuid4(), quantity=2)
    claim = await ClaimWorkflow(fake_stores).claim_listing(listing.id, uuid4(), 1)

    with pytest.raises(NotAllowedError):
        await ClaimWorkflow(fake_stores).unclaim(claim.id, uuid4())
    assert claim.id in fake_stores.claims.rows


async def test_unclaim_after_listing_deleted_still_removes_claim(fake_stores):
    listings = fake_stores.items(ItemKind.LISTING)
    listing = listings.add(uuid4(), quantity=2)
    claimer = uuid4()
    claim = await ClaimWorkflow(fake_stores).claim_listing(listing.id, claimer, 1)
    del listings.rows[listing.id]

    await ClaimWorkflow(fake_stores).unclaim(claim.id, claimer)

    assert fake_stores.claims.rows == {}
