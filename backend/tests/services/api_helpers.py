"""Route test helpers — acting-user headers and seed payloads."""


def as_user(user_id) -> dict:
    """Request headers for the acting user."""
    return {"X-User-Id": str(user_id)}


def listing_payload(**overrides) -> dict:
    body = {
        "name": "Desk lamp",
        "meetup_location": "Main library lobby",
        "quantity": 2,
        "expire_date": "2099-01-01",
        "expire_time": "12:00",
    }
    body.update(overrides)
    return body


def request_payload(**overrides) -> dict:
    body = {
        "name": "Bike pump",
        "quantity": 1,
        "expire_date": "2099-01-01",
    }
    body.update(overrides)
    return body
