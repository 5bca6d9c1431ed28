"""Root conftest — shared test configuration."""

import os

# Tests never reach a real database or start the background sweep
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("EXPIRATION_SWEEP_ENABLED", "false")
