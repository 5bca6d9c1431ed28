"""Offer workflows — make, edit, withdraw, accept.

Invariants:
    - Accepting hides the parent request and marks only that offer accepted
    - Sibling offers are never touched by acceptance
    - Accepting an unknown offer changes nothing
"""

from uuid import uuid4

import pytest

from sharehub.core.domain_types import ItemKind, OfferState
from sharehub.core.errors import (
    DatabaseError, NotAllowedError, OfferStateError, ResourceNotFoundError,
)
from sharehub.services.offer_workflows import OfferWorkflows


@pytest.fixture
def request_with_offers(fake_stores):
    request = fake_stores.items(ItemKind.REQUEST).add(uuid4())
    o1 = fake_stores.offers.add(request.id, uuid4())
    o2 = fake_stores.offers.add(request.id, uuid4())
    return request, o1, o2


async def test_accept_hides_request_and_leaves_sibling_active(fake_stores, request_with_offers):
    request, o1, o2 = request_with_offers

    result = await OfferWorkflows(fake_stores).accept_offer(o1.id, request.author_id)

    assert result == {}
    assert request.hidden is True
    assert o1.state == OfferState.ACCEPTED.value
    assert o2.state == OfferState.ACTIVE.value


async def test_accept_unknown_offer_changes_nothing(fake_stores, request_with_offers):
    request, _, _ = request_with_offers

    with pytest.raises(ResourceNotFoundError):
        await OfferWorkflows(fake_stores).accept_offer(uuid4(), request.author_id)

    assert request.hidden is False
    assert "set_hidden" not in fake_stores.items(ItemKind.REQUEST).calls


async def test_accepting_twice_conflicts(fake_stores, request_with_offers):
    request, o1, _ = request_with_offers
    workflows = OfferWorkflows(fake_stores)
    await workflows.accept_offer(o1.id, request.author_id)

    with pytest.raises(OfferStateError):
        await workflows.accept_offer(o1.id, request.author_id)
    assert o1.state == OfferState.ACCEPTED.value


async def test_accept_on_already_hidden_request(fake_stores, request_with_offers):
    request, o1, _ = request_with_offers
    request.hidden = True

    await OfferWorkflows(fake_stores).accept_offer(o1.id, request.author_id)

    assert request.hidden is True
    assert o1.state == OfferState.ACCEPTED.value


async def test_accept_write_failure_leaves_request_hidden(fake_stores, request_with_offers):
    request, o1, _ = request_with_offers
    fake_stores.offers.fail("accept", DatabaseError("x", "mark offer accepted"))

    with pytest.raises(DatabaseError):
        await OfferWorkflows(fake_stores).accept_offer(o1.id, request.author_id)

    assert request.hidden is True
    assert o1.state == OfferState.ACTIVE.value


async def test_accepting_withdrawn_offer_hides_request_then_conflicts(
    fake_stores, request_with_offers,
):
    request, o1, o2 = request_with_offers
    o1.state = OfferState.REMOVED.value

    with pytest.raises(OfferStateError):
        await OfferWorkflows(fake_stores).accept_offer(o1.id, request.author_id)

    assert request.hidden is True
    assert o1.state == OfferState.REMOVED.value
    assert o2.state == OfferState.ACTIVE.value


async def test_make_offer_on_own_request_not_allowed(fake_stores):
    request = fake_stores.items(ItemKind.REQUEST).add(uuid4())

    with pytest.raises(NotAllowedError):
        await OfferWorkflows(fake_stores).make_offer(
            request.author_id, request.id, {"location": "Gym"},
        )
    assert fake_stores.offers.rows == {}


async def test_make_offer_on_hidden_request_not_allowed(fake_stores):
    request = fake_stores.items(ItemKind.REQUEST).add(uuid4(), hidden=True)

    with pytest.raises(NotAllowedError):
        await OfferWorkflows(fake_stores).make_offer(uuid4(), request.id, {"location": "Gym"})


async def test_make_offer_creates_active_offer(fake_stores):
    request = fake_stores.items(ItemKind.REQUEST).add(uuid4())
    offerer = uuid4()

    offer = await OfferWorkflows(fake_stores).make_offer(
        offerer, request.id, {"location": "Gym", "message": "Have one"},
    )
    assert offer.state == OfferState.ACTIVE.value
    assert offer.offerer_id == offerer
    assert offer.request_id == request.id


async def test_only_offerer_may_withdraw(fake_stores, request_with_offers):
    _, o1, _ = request_with_offers
    workflows = OfferWorkflows(fake_stores)

    with pytest.raises(NotAllowedError):
        await workflows.withdraw_offer(o1.id, uuid4())

    await workflows.withdraw_offer(o1.id, o1.offerer_id)
    assert o1.state == OfferState.REMOVED.value


async def test_edit_offer_updates_fields(fake_stores, request_with_offers):
    _, o1, _ = request_with_offers

    edited = await OfferWorkflows(fake_stores).edit_offer(
        o1.id, o1.offerer_id, {"location": "Cafe"},
    )
    assert edited.location == "Cafe"
