"""Infrastructure Layer — database engine, logging setup, background scheduling.

Invariants:
    - Nothing here knows about listings, requests, or offers

Design Decisions:
    - Initialized once from the FastAPI lifespan
"""
