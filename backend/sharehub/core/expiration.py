"""Expiration Rules — pure functions for expiration instants and sweep decisions.

Invariants:
    - Expiration instants are naive UTC datetimes (date + "HH:MM" time)
    - An item is expired when its instant is at or before `now`
    - decide_sweep_action never hides an item twice: hidden is monotonic

Design Decisions:
    - Naive UTC over aware datetimes: SQLite drops tzinfo, PostgreSQL keeps it;
      storing naive UTC makes `expires_at <= now` compare identically on both
    - Sweep decision isolated from IO so every branch is testable without a DB
"""

from datetime import date, datetime, time, timezone

from sharehub.core.domain_types import SweepAction
from sharehub.core.errors import ItemValidationError

DEFAULT_EXPIRATION_TIME = "00:00"


def parse_expiration(expire_date: str, expire_time: str = DEFAULT_EXPIRATION_TIME) -> datetime:
    """Combine ISO date ("YYYY-MM-DD") and "HH:MM" into a naive UTC instant."""
    try:
        day = date.fromisoformat(expire_date)
    except (TypeError, ValueError):
        raise ItemValidationError(
            f"Invalid expiration date '{expire_date}' (expected YYYY-MM-DD)",
            "expire_date",
        )
    try:
        hours, minutes = (int(part) for part in expire_time.split(":"))
        clock = time(hours, minutes)
    except (AttributeError, TypeError, ValueError):
        raise ItemValidationError(
            f"Invalid expiration time '{expire_time}' (expected HH:MM)",
            "expire_time",
        )
    return datetime.combine(day, clock)


def as_naive_utc(moment: datetime) -> datetime:
    """Normalize an aware or naive datetime to naive UTC."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def utc_now() -> datetime:
    return as_naive_utc(datetime.now(timezone.utc))


def is_expired(expires_at: datetime, now: datetime) -> bool:
    return as_naive_utc(expires_at) <= as_naive_utc(now)


def decide_sweep_action(item_hidden: bool | None) -> SweepAction:
    """Pick the sweep step for an expired record.

    item_hidden is None when the referenced item no longer exists.
    """
    if item_hidden is None:
        return SweepAction.PURGE_STALE
    if item_hidden:
        return SweepAction.PURGE
    return SweepAction.HIDE_AND_PURGE
