"""ShareHub API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ShareHubError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized and the expiration sweep scheduler started on
      startup via lifespan; the scheduler is stopped before the engine is disposed

Design Decisions:
    - Lifespan over @app.on_event: one place owns startup/shutdown ordering
    - The scheduler lives on app.state, not in a module global, so the readiness
      probe can report it and tests can replace it
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from sharehub.api.error_handlers import register_error_handlers
from sharehub.api.routes import (
    claims, expirations, health, listings, offers, reports, requests,
    reviews, tags, users,
)
from sharehub.config import get_settings
from sharehub.infrastructure.database import init_db
from sharehub.infrastructure.observability import setup_logging
from sharehub.services.sweep_scheduler import ExpirationSweepScheduler
from sharehub.stores.registry import open_store_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    scheduler = None
    if settings.expiration_sweep_enabled:
        scheduler = ExpirationSweepScheduler(
            lambda: open_store_registry(manager),
            settings.expiration_sweep_interval_seconds,
        )
        await scheduler.start()
    app.state.sweep_scheduler = scheduler
    logger.info("ShareHub API started")
    yield
    logger.info("ShareHub API shutting down")
    if scheduler:
        await scheduler.stop()
    await manager.dispose()


app = FastAPI(
    title="ShareHub API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(listings.router)
app.include_router(requests.router)
app.include_router(offers.router)
app.include_router(claims.router)
app.include_router(expirations.router)
app.include_router(reviews.router)
app.include_router(reports.router)
app.include_router(tags.router)
app.include_router(users.router)

# Static frontend build, mounted AFTER API routes so /api/v1/* takes precedence
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
