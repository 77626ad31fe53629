"""Feed item repository operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tadmin import collections
from tadmin.feed.decoding import decode_feed_item, encode_feed_item
from tadmin.feed.schemas import FeedItem
from tadmin.store import documents

if TYPE_CHECKING:
    from tadmin.store.base import DocumentStore

logger = logging.getLogger(__name__)

KIND = "Feed item"


async def fetch_feed_items(store: DocumentStore, user_id: str | None = None) -> list[FeedItem]:
    """Fetch all feed items, or only those belonging to ``user_id``."""
    return await documents.fetch_all(store, collections.FEED, decode_feed_item, user_id=user_id)


async def fetch_feed_item(store: DocumentStore, item_id: str) -> FeedItem | None:
    return await documents.fetch_one(store, collections.FEED, item_id, decode_feed_item)


async def create_feed_item(store: DocumentStore, item: FeedItem) -> str:
    item_id = await store.add(collections.FEED, encode_feed_item(item))
    logger.info("Created feed item %s for user %s", item_id, item.user_id)
    return item_id


async def update_feed_item(store: DocumentStore, item: FeedItem) -> None:
    await documents.update(store, collections.FEED, item.id, encode_feed_item(item), KIND)


async def delete_feed_item(store: DocumentStore, item_id: str | None) -> None:
    await documents.delete(store, collections.FEED, item_id, KIND)
