"""Declarative Base — metadata shared by every concept store's tables.

Invariants:
    - Every model inherits from Base; alembic env.py and the test fixtures
      read Base.metadata
    - Constraint names are deterministic (naming convention), so migrations
      can drop what create_all made

Design Decisions:
    - No relationships across stores: Base carries metadata only, the stores
      decide how rows are reached
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all ShareHub ORM models."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
