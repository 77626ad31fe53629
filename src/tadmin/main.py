"""Process lifecycle for the admin core."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog

from tadmin.config import Settings, get_settings
from tadmin.log_config import setup_logging
from tadmin.store import DocumentStore, close_store, init_store


@asynccontextmanager
async def lifespan(settings: Settings | None = None) -> AsyncGenerator[DocumentStore, None]:
    """Startup and shutdown lifecycle. Yields the initialized store."""
    settings = settings or get_settings()
    setup_logging(settings)
    store = await init_store(settings)
    structlog.get_logger().info(
        "admin_core_started",
        version=settings.app_version,
        environment=settings.environment,
        backend=settings.store_backend,
    )

    try:
        yield store
    finally:
        await close_store()
