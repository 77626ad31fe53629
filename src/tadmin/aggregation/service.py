"""Load view-ready joined lists.

The two sides of each join are fetched concurrently; the join itself does
not depend on which finishes first.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from tadmin.activities.service import fetch_activities
from tadmin.aggregation.joins import (
    ActivityWithUser,
    FeedItemWithUser,
    TerritoryWithUser,
    join_activities_with_users,
    join_feed_with_users,
    join_territories_with_users,
)
from tadmin.aggregation.metrics import sort_activities, sort_feed_items, sort_territories
from tadmin.feed.service import fetch_feed_items
from tadmin.territories.service import fetch_territories
from tadmin.users.service import fetch_users

if TYPE_CHECKING:
    from tadmin.store.base import DocumentStore


async def load_activities_with_users(store: DocumentStore, user_id: str | None = None) -> list[ActivityWithUser]:
    """Activities joined to their owners, most recently finished first."""
    activities, users = await asyncio.gather(fetch_activities(store, user_id), fetch_users(store))
    return join_activities_with_users(sort_activities(activities), users)


async def load_feed_with_users(store: DocumentStore, user_id: str | None = None) -> list[FeedItemWithUser]:
    """Feed items joined to their owners, newest first."""
    items, users = await asyncio.gather(fetch_feed_items(store, user_id), fetch_users(store))
    return join_feed_with_users(sort_feed_items(items), users)


async def load_territories_with_users(store: DocumentStore, user_id: str | None = None) -> list[TerritoryWithUser]:
    """Territories joined to their owners, newest first."""
    territories, users = await asyncio.gather(fetch_territories(store, user_id), fetch_users(store))
    return join_territories_with_users(sort_territories(territories), users)
