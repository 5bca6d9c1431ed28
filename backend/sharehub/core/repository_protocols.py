"""Boundary Protocols — contracts between the coordinators and the concept stores.

Invariants:
    - Coordinators NEVER import concrete stores — dependency arrows point inward only
    - Each store is the sole mutator of its own collection
    - Store methods raise ResourceNotFoundError for missing ids on reads and edits;
      ExpirationStore.delete is the one idempotent delete (missing record is a no-op)

Design Decisions:
    - Protocol over ABC: structural subtyping, so SQLAlchemy stores and the
      in-memory test stores satisfy the same contract without inheritance
    - HideableItemStore is the capability the sweep needs ({get_by_id, set_hidden});
      both Listing and Request stores satisfy it, so the sweep is written once
      and driven by ItemKind
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Any, Protocol

from sharehub.core.domain_types import (
    ItemId, ItemKind, UserId, OfferId, ClaimId, ExpirationId, OfferState,
)


class ItemLike(Protocol):
    """Structural contract for Listing / Request rows."""
    id: ItemId
    author_id: UserId
    name: str
    quantity: int
    hidden: bool


class ExpirationLike(Protocol):
    """Structural contract for expiration records."""
    id: ExpirationId
    item_id: ItemId
    item_kind: str
    expire_date: str
    expire_time: str
    expires_at: datetime


class OfferLike(Protocol):
    """Structural contract for offers on a request."""
    id: OfferId
    request_id: ItemId
    offerer_id: UserId
    state: str


class ClaimLike(Protocol):
    """Structural contract for claims on a listing."""
    id: ClaimId
    listing_id: ItemId
    claimer_id: UserId
    quantity: int


class HideableItemStore(Protocol):
    """Capability shared by both item kinds — all the sweep needs."""
    async def get_by_id(self, item_id: ItemId) -> ItemLike: ...
    async def set_hidden(self, item_id: ItemId) -> None: ...


class ItemStore(HideableItemStore, Protocol):
    """Contract for Listing / Request persistence."""
    kind: ItemKind

    async def create(self, owner_id: UserId, fields: dict[str, Any]) -> ItemLike: ...
    async def get_by_author(self, owner_id: UserId) -> list[ItemLike]: ...
    async def list_all(self) -> list[ItemLike]: ...
    async def count_by_author(self, owner_id: UserId) -> int: ...
    async def edit(self, item_id: ItemId, fields: dict[str, Any]) -> ItemLike: ...
    async def delete(self, item_id: ItemId) -> None: ...
    async def assert_author_is(self, item_id: ItemId, user_id: UserId) -> None: ...


class ExpirationStore(Protocol):
    """Contract for expiration records of one item kind."""
    kind: ItemKind

    async def allocate(
        self, item_id: ItemId, expire_date: str, expire_time: str,
    ) -> ExpirationLike: ...
    async def get_by_id(self, record_id: ExpirationId) -> ExpirationLike: ...
    async def get_by_item(self, item_id: ItemId) -> ExpirationLike | None: ...
    async def edit(
        self, record_id: ExpirationId, expire_date: str, expire_time: str,
    ) -> ExpirationLike: ...
    async def delete(self, record_id: ExpirationId) -> None: ...
    async def get_all_expired(self, now: datetime) -> list[ExpirationLike]: ...


class OfferStore(Protocol):
    """Contract for offer persistence."""
    async def create(
        self, offerer_id: UserId, request_id: ItemId, fields: dict[str, Any],
    ) -> OfferLike: ...
    async def get_by_id(self, offer_id: OfferId) -> OfferLike: ...
    async def get_by_item(self, request_id: ItemId) -> list[OfferLike]: ...
    async def get_by_offerer(self, offerer_id: UserId) -> list[OfferLike]: ...
    async def list_all(self) -> list[OfferLike]: ...
    async def edit(self, offer_id: OfferId, fields: dict[str, Any]) -> OfferLike: ...
    async def accept(self, offer_id: OfferId) -> None: ...
    async def remove(self, offer_id: OfferId) -> None: ...
    async def remove_all_for_item(self, request_id: ItemId) -> None: ...
    async def assert_offerer_is(self, offer_id: OfferId, user_id: UserId) -> None: ...


class ClaimStore(Protocol):
    """Contract for claim persistence."""
    async def claim(
        self, claimer_id: UserId, listing_id: ItemId, quantity: int,
    ) -> ClaimLike: ...
    async def get_by_id(self, claim_id: ClaimId) -> ClaimLike: ...
    async def get_by_listing(self, listing_id: ItemId) -> list[ClaimLike]: ...
    async def get_by_claimer(self, claimer_id: UserId) -> list[ClaimLike]: ...
    async def list_all(self) -> list[ClaimLike]: ...
    async def delete(self, claim_id: ClaimId) -> None: ...


class TagStore(Protocol):
    """Contract for tag labels and item associations."""
    async def create_tag(self, label: str) -> Any: ...
    async def tag_item(self, item_id: ItemId, item_kind: ItemKind, label: str) -> None: ...
    async def get_items_with_tag(self, label: str) -> list[dict]: ...


class StoreProvider(Protocol):
    """Everything a coordinator may touch, keyed by item kind where relevant."""
    offers: OfferStore
    claims: ClaimStore
    tags: TagStore

    def items(self, kind: ItemKind) -> ItemStore: ...
    def expirations(self, kind: ItemKind) -> ExpirationStore: ...
    def item_kinds(self) -> Iterable[ItemKind]: ...
