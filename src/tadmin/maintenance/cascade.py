"""Cascading deletes.

A parent document is deleted together with a best-effort sweep of the
subcollections it may have. Which subcollection an activity actually uses is
not known up front, so every configured name is probed. A failure while
sweeping one subcollection is logged and skipped. A failure deleting the
parent propagates.

Bulk loops delete one entity at a time and never roll back. When one fails
the loop stops and :class:`PartialCascadeError` reports what was already
deleted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from tadmin import collections
from tadmin.activities.service import fetch_activities
from tadmin.config import get_settings
from tadmin.errors import StoreOperationError
from tadmin.feed.service import delete_feed_item, fetch_feed_items
from tadmin.store.documents import for_each, require_id
from tadmin.territories.service import fetch_territories

if TYPE_CHECKING:
    from tadmin.store.base import DocumentStore

logger = structlog.get_logger()


async def delete_subcollection(store: DocumentStore, path: str) -> int:
    """Delete every document under ``path`` sequentially. Returns how many."""
    docs = await store.query(path)
    for doc in docs:
        await store.delete(path, doc.id)
    return len(docs)


async def _delete_with_children(
    store: DocumentStore,
    parent: str,
    doc_id: str | None,
    subcollections: list[str],
    kind: str,
) -> None:
    doc_id = require_id(doc_id, kind)
    for name in subcollections:
        path = collections.subcollection(parent, doc_id, name)
        try:
            removed = await delete_subcollection(store, path)
        except StoreOperationError as e:
            logger.warning("cascade_subcollection_failed", path=path, error=str(e))
            continue
        if removed:
            logger.debug("cascade_subcollection_deleted", path=path, documents=removed)

    await store.delete(parent, doc_id)
    logger.info("cascade_deleted", collection=parent, doc_id=doc_id)


async def delete_activity_with_children(
    store: DocumentStore,
    activity_id: str | None,
    subcollections: list[str] | None = None,
) -> None:
    """Delete an activity and whatever route/territory subcollections it has."""
    names = subcollections if subcollections is not None else get_settings().activity_subcollections
    await _delete_with_children(store, collections.ACTIVITIES, activity_id, names, "Activity")


async def delete_territory_with_children(
    store: DocumentStore,
    territory_id: str | None,
    subcollections: list[str] | None = None,
) -> None:
    """Delete a territory together with its ownership history."""
    names = subcollections if subcollections is not None else get_settings().territory_subcollections
    await _delete_with_children(store, collections.TERRITORIES, territory_id, names, "Territory")


async def delete_territories(store: DocumentStore, user_id: str | None = None) -> list[str]:
    """Cascade-delete every territory, or every territory owned by ``user_id``."""
    territories = await fetch_territories(store, user_id)
    ids = [t.id for t in territories if t.id]
    return await for_each(store, ids, delete_territory_with_children, "territory")


async def delete_activities(store: DocumentStore, user_id: str | None = None) -> list[str]:
    """Cascade-delete every activity, or every activity owned by ``user_id``."""
    activities = await fetch_activities(store, user_id)
    ids = [a.id for a in activities if a.id]
    return await for_each(store, ids, delete_activity_with_children, "activity")


async def delete_feed_items(store: DocumentStore, user_id: str | None = None) -> list[str]:
    items = await fetch_feed_items(store, user_id)
    ids = [i.id for i in items if i.id]
    return await for_each(store, ids, delete_feed_item, "feed item")
