"""Database Schema — the declarative Base behind every ShareHub table.

Invariants:
    - Engine and sessions live in infrastructure/database.py, not here

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
