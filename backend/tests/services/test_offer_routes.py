"""Offer, claim, review, and report routes over HTTP."""

from uuid import uuid4

from tests.services.api_helpers import as_user, listing_payload, request_payload


async def _request(client, author) -> str:
    res = await client.post("/api/v1/requests", json=request_payload(), headers=as_user(author))
    return res.json()["request"]["id"]


async def _offer(client, request_id, offerer) -> str:
    res = await client.post(
        "/api/v1/offers",
        json={"request_id": request_id, "location": "Front desk"},
        headers=as_user(offerer),
    )
    assert res.status_code == 201
    return res.json()["id"]


async def test_accept_offer_hides_request_and_keeps_sibling(client, alice, bob):
    request_id = await _request(client, alice)
    o1 = await _offer(client, request_id, bob)
    o2 = await _offer(client, request_id, uuid4())

    res = await client.post(f"/api/v1/offers/{o1}/accept", headers=as_user(alice))
    assert res.status_code == 200
    assert res.json() == {"msg": "Accepted offer!"}

    assert (await client.get(f"/api/v1/requests/{request_id}")).json()["hidden"] is True
    assert (await client.get(f"/api/v1/offers/{o1}")).json()["state"] == "accepted"
    assert (await client.get(f"/api/v1/offers/{o2}")).json()["state"] == "active"


async def test_accept_twice_is_409(client, alice, bob):
    request_id = await _request(client, alice)
    o1 = await _offer(client, request_id, bob)
    await client.post(f"/api/v1/offers/{o1}/accept", headers=as_user(alice))

    res = await client.post(f"/api/v1/offers/{o1}/accept", headers=as_user(alice))
    assert res.status_code == 409


async def test_accept_unknown_offer_is_404(client, alice):
    res = await client.post(f"/api/v1/offers/{uuid4()}/accept", headers=as_user(alice))
    assert res.status_code == 404


async def test_offer_on_own_request_is_403(client, alice):
    request_id = await _request(client, alice)
    res = await client.post(
        "/api/v1/offers",
        json={"request_id": request_id, "location": "Gym"},
        headers=as_user(alice),
    )
    assert res.status_code == 403


async def test_deleting_request_removes_its_offers(client, alice, bob):
    request_id = await _request(client, alice)
    await _offer(client, request_id, bob)
    await _offer(client, request_id, uuid4())

    res = await client.delete(f"/api/v1/requests/{request_id}", headers=as_user(alice))
    assert res.status_code == 200

    offers = await client.get("/api/v1/offers", params={"request_id": request_id})
    assert offers.json() == []
    again = await client.delete(f"/api/v1/requests/{request_id}", headers=as_user(alice))
    assert again.status_code == 404


async def test_withdraw_offer(client, alice, bob):
    request_id = await _request(client, alice)
    o1 = await _offer(client, request_id, bob)

    denied = await client.delete(f"/api/v1/offers/{o1}", headers=as_user(alice))
    assert denied.status_code == 403

    res = await client.delete(f"/api/v1/offers/{o1}", headers=as_user(bob))
    assert res.status_code == 200
    assert (await client.get(f"/api/v1/offers/{o1}")).json()["state"] == "removed"


async def test_claim_listing_until_exhausted(client, alice, bob):
    created = await client.post(
        "/api/v1/listings", json=listing_payload(quantity=2), headers=as_user(alice),
    )
    listing_id = created.json()["listing"]["id"]

    res = await client.post(
        "/api/v1/claims", json={"listing_id": listing_id, "quantity": 2},
        headers=as_user(bob),
    )
    assert res.status_code == 201

    listing = (await client.get(f"/api/v1/listings/{listing_id}")).json()
    assert listing["quantity"] == 0
    assert listing["hidden"] is True

    more = await client.post(
        "/api/v1/claims", json={"listing_id": listing_id, "quantity": 1},
        headers=as_user(uuid4()),
    )
    assert more.status_code == 403


async def test_over_claim_is_400(client, alice, bob):
    created = await client.post(
        "/api/v1/listings", json=listing_payload(quantity=1), headers=as_user(alice),
    )
    listing_id = created.json()["listing"]["id"]

    res = await client.post(
        "/api/v1/claims", json={"listing_id": listing_id, "quantity": 5},
        headers=as_user(bob),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "CLAIM_QUANTITY_EXCEEDED"


async def test_unclaim_restores_quantity(client, alice, bob):
    created = await client.post(
        "/api/v1/listings", json=listing_payload(quantity=3), headers=as_user(alice),
    )
    listing_id = created.json()["listing"]["id"]
    claim = await client.post(
        "/api/v1/claims", json={"listing_id": listing_id, "quantity": 1},
        headers=as_user(bob),
    )

    res = await client.delete(f"/api/v1/claims/{claim.json()['id']}", headers=as_user(bob))
    assert res.status_code == 200
    assert (await client.get(f"/api/v1/listings/{listing_id}")).json()["quantity"] == 3


async def test_review_average(client, alice, bob):
    for rating in (4, 5):
        res = await client.post(
            "/api/v1/reviews", json={"subject_id": str(alice), "rating": rating},
            headers=as_user(uuid4()),
        )
        assert res.status_code == 201

    res = await client.get("/api/v1/reviews/average", params={"subject_id": str(alice)})
    assert res.json() == {"subject_id": str(alice), "average": 4.5, "count": 2}

    empty = await client.get("/api/v1/reviews/average", params={"subject_id": str(bob)})
    assert empty.json()["average"] == 0.0


async def test_rating_out_of_range_is_400(client, alice, bob):
    res = await client.post(
        "/api/v1/reviews", json={"subject_id": str(alice), "rating": 9},
        headers=as_user(bob),
    )
    assert res.status_code == 400


async def test_report_threshold(client, alice):
    for _ in range(3):
        await client.post(
            "/api/v1/reports", json={"reported_id": str(alice)}, headers=as_user(uuid4()),
        )

    res = await client.get("/api/v1/reports", params={"reported_id": str(alice)})
    assert res.json() == {
        "reported_id": str(alice), "number_of_reports": 3, "is_reported": True,
    }
