"""Generic typed document operations shared by the per-entity services."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import structlog

from tadmin.errors import MissingIdentifierError, PartialCascadeError, StoreOperationError
from tadmin.store.base import DocumentStore

logger = structlog.get_logger()

T = TypeVar("T")
Decoder = Callable[[str, dict[str, Any]], T]
PerDocument = Callable[[DocumentStore, str], Awaitable[None]]

OWNER_FIELD = "userId"


async def fetch_all(
    store: DocumentStore,
    collection: str,
    decode: Decoder[T],
    user_id: str | None = None,
    order_by: tuple[str, bool] | None = None,
) -> list[T]:
    """Fetch and decode every document, optionally only those owned by ``user_id``."""
    where = (OWNER_FIELD, user_id) if user_id is not None else None
    docs = await store.query(collection, where=where, order_by=order_by)
    return [decode(doc.id, doc.data) for doc in docs]


async def fetch_one(store: DocumentStore, collection: str, doc_id: str, decode: Decoder[T]) -> T | None:
    doc = await store.get(collection, doc_id)
    if doc is None:
        return None
    return decode(doc.id, doc.data)


def require_id(doc_id: str | None, kind: str) -> str:
    """Return ``doc_id`` or raise MissingIdentifierError when it is empty."""
    if not doc_id:
        raise MissingIdentifierError(kind)
    return doc_id


async def update(
    store: DocumentStore,
    collection: str,
    doc_id: str | None,
    fields: dict[str, Any],
    kind: str,
) -> None:
    """Merge ``fields`` into an existing document. Fails before any store call without an ID."""
    await store.set_merge(collection, require_id(doc_id, kind), fields)


async def delete(store: DocumentStore, collection: str, doc_id: str | None, kind: str) -> None:
    await store.delete(collection, require_id(doc_id, kind))


async def for_each(store: DocumentStore, doc_ids: list[str], action: PerDocument, kind: str) -> list[str]:
    """Run ``action`` for each ID in order, one at a time. Returns the IDs done.

    Raises:
        PartialCascadeError: On the first store failure; earlier work stands.
    """
    completed: list[str] = []
    for doc_id in doc_ids:
        try:
            await action(store, doc_id)
        except StoreOperationError as e:
            logger.error(
                "bulk_operation_stopped",
                kind=kind,
                failed_id=doc_id,
                completed=len(completed),
                remaining=len(doc_ids) - len(completed),
                error=str(e),
            )
            raise PartialCascadeError(doc_id, completed, e) from e
        completed.append(doc_id)
    return completed
