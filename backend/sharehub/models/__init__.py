"""ORM Models — SQLAlchemy declarative models, one per concept store.

Invariants:
    - All models inherit from Base (db/base.py)
    - No foreign keys between concept stores: expiration records, offers,
      claims, reviews and tag links reference items by id only, so each store
      commits on its own and coordinators own cross-store consistency

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before
      create_all / alembic autogenerate runs
"""

from sharehub.models.listing import Listing  # noqa: F401
from sharehub.models.request import Request  # noqa: F401
from sharehub.models.expiration_record import ExpirationRecord  # noqa: F401
from sharehub.models.offer import Offer  # noqa: F401
from sharehub.models.claim import Claim  # noqa: F401
from sharehub.models.review import Review  # noqa: F401
from sharehub.models.tag import Tag, ItemTag  # noqa: F401
from sharehub.models.report import Report  # noqa: F401
