"""Concept Stores — one SQLAlchemy-backed store per domain concept.

Invariants:
    - Each store is the sole mutator of its own table(s)
    - Every mutating method commits its own unit of work; there is no
      transaction spanning two stores
    - Implement the Protocols in core/repository_protocols.py

Design Decisions:
    - Stores share the request's AsyncSession but never each other's rows:
      coordinators in services/ sequence the calls and compensate
"""
