"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ItemId, UserId, OfferId, ClaimId, ExpirationId wrap UUIDs
    - An Item is either a Listing or a Request (ItemKind) — the only two
      entities subject to expiration
    - Offer lifecycle: active -> accepted (exactly once) | active -> removed
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and to the DB `state` / `item_kind` columns as-is
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

ItemId = NewType("ItemId", UUID)
UserId = NewType("UserId", UUID)
OfferId = NewType("OfferId", UUID)
ClaimId = NewType("ClaimId", UUID)
ExpirationId = NewType("ExpirationId", UUID)
ReviewId = NewType("ReviewId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class ItemKind(str, Enum):
    """The two item kinds that carry expiration records."""
    LISTING = "listing"
    REQUEST = "request"


class OfferState(str, Enum):
    """Offer lifecycle states — maps to DB `state` column."""
    ACTIVE = "active"
    ACCEPTED = "accepted"
    REMOVED = "removed"


class SweepAction(str, Enum):
    """What one expiration sweep step does with an expired record."""
    HIDE_AND_PURGE = "hide_and_purge"   # visible item: hide, then drop record
    PURGE = "purge"                     # already hidden: drop record only
    PURGE_STALE = "purge_stale"         # item gone: record is stale
