"""Store Registry — binds every concept store to one AsyncSession.

Invariants:
    - items(kind) / expirations(kind) cover exactly ItemKind.LISTING and ItemKind.REQUEST
    - One registry per request or per sweep tick; never shared across tasks

Design Decisions:
    - Registry satisfies core StoreProvider, so coordinators accept either this
      or the in-memory stores used in tests
"""

from collections.abc import Iterable
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from sharehub.core.domain_types import ItemKind
from sharehub.infrastructure.database import DatabaseSessionManager
from sharehub.stores.claim_store import SqlClaimStore
from sharehub.stores.expiration_store import SqlExpirationStore
from sharehub.stores.item_store import ListingStore, RequestStore, SqlItemStore
from sharehub.stores.offer_store import SqlOfferStore
from sharehub.stores.report_store import SqlReportStore
from sharehub.stores.review_store import SqlReviewStore
from sharehub.stores.tag_store import SqlTagStore


class StoreRegistry:
    """All concept stores over a single database session."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self._items: dict[ItemKind, SqlItemStore] = {
            ItemKind.LISTING: ListingStore(db),
            ItemKind.REQUEST: RequestStore(db),
        }
        self._expirations = {
            kind: SqlExpirationStore(db, kind) for kind in ItemKind
        }
        self.offers = SqlOfferStore(db)
        self.claims = SqlClaimStore(db)
        self.tags = SqlTagStore(db)
        self.reviews = SqlReviewStore(db)
        self.reports = SqlReportStore(db)

    def items(self, kind: ItemKind) -> SqlItemStore:
        return self._items[kind]

    def expirations(self, kind: ItemKind) -> SqlExpirationStore:
        return self._expirations[kind]

    def item_kinds(self) -> Iterable[ItemKind]:
        return tuple(ItemKind)


@asynccontextmanager
async def open_store_registry(
    manager: DatabaseSessionManager,
) -> AsyncGenerator[StoreRegistry, None]:
    """Fresh session + registry for work outside a request (the sweep)."""
    async with manager.session() as db:
        yield StoreRegistry(db)
