"""Process-wide document store handle."""

from __future__ import annotations

import structlog

from tadmin.config import Settings
from tadmin.store.base import DocumentStore
from tadmin.store.memory import InMemoryStore

logger = structlog.get_logger()

_store: DocumentStore | None = None


def build_store(settings: Settings) -> DocumentStore:
    """Create the store configured by ``settings.store_backend``."""
    backend = settings.store_backend.lower()
    if backend == "memory":
        return InMemoryStore()
    if backend == "firestore":
        # Imported lazily so the memory backend works without Google credentials
        from tadmin.store.firestore import create_firestore_store

        return create_firestore_store(settings)
    msg = f"Unknown store backend: {settings.store_backend}"
    raise ValueError(msg)


async def init_store(settings: Settings) -> DocumentStore:
    """Initialize the process-wide store."""
    global _store  # noqa: PLW0603
    _store = build_store(settings)
    logger.info("store_initialized", backend=settings.store_backend)
    return _store


async def close_store() -> None:
    """Close the process-wide store."""
    global _store  # noqa: PLW0603
    if _store:
        await _store.close()
        _store = None


def get_store() -> DocumentStore:
    """Get the process-wide store."""
    if _store is None:
        msg = "Document store not initialized. Call init_store() first."
        raise RuntimeError(msg)
    return _store
