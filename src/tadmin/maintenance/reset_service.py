"""Progress resets: one user, or every user at once (master wipe).

Accounts and follow edges always survive. Steps run in a fixed order
(stats, feed, activities, territories) and each waits for the previous one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from tadmin import collections
from tadmin.maintenance.cascade import delete_activities, delete_feed_items, delete_territories
from tadmin.store.documents import for_each, require_id
from tadmin.users.service import fetch_users, update_user

if TYPE_CHECKING:
    from tadmin.store.base import DocumentStore
    from tadmin.users.schemas import User

logger = structlog.get_logger()


@dataclass(frozen=True)
class ResetReport:
    user_id: str
    feed_items_deleted: int
    activities_deleted: int
    territories_deleted: int


@dataclass(frozen=True)
class WipeReport:
    users_reset: int
    feed_items_deleted: int
    activities_deleted: int
    territories_deleted: int


async def reset_user_stats(store: DocumentStore, user: User) -> User:
    """Rewrite the user's record with xp=0 and level=1. Returns the new record."""
    require_id(user.id, "User")
    reset = user.model_copy(update={"xp": 0, "level": 1})
    await update_user(store, reset)
    return reset


async def zero_user_progress(store: DocumentStore, user_id: str) -> None:
    """Set only ``xp`` and ``level``; every other stored field is left as is."""
    await store.set_merge(collections.USERS, user_id, {"xp": 0, "level": 1})


async def reset_user_data(store: DocumentStore, user: User) -> ResetReport:
    """Zero a user's progress and delete everything they own, keeping the account.

    Raises:
        MissingIdentifierError: If the user has no ID (nothing is touched).
        PartialCascadeError: If a bulk delete stops partway.
    """
    user_id = require_id(user.id, "User")
    log = logger.bind(user_id=user_id)

    await reset_user_stats(store, user)
    feed = await delete_feed_items(store, user_id)
    activities = await delete_activities(store, user_id)
    territories = await delete_territories(store, user_id)

    report = ResetReport(
        user_id=user_id,
        feed_items_deleted=len(feed),
        activities_deleted=len(activities),
        territories_deleted=len(territories),
    )
    log.info(
        "user_data_reset",
        feed_items=report.feed_items_deleted,
        activities=report.activities_deleted,
        territories=report.territories_deleted,
    )
    return report


async def master_wipe_all_data(store: DocumentStore) -> WipeReport:
    """Reset every user's progress and delete all feed, activity and territory data."""
    logger.warning("master_wipe_started")

    users = await fetch_users(store)
    reset_ids = await for_each(store, [u.id for u in users if u.id], zero_user_progress, "user")

    feed = await delete_feed_items(store)
    activities = await delete_activities(store)
    territories = await delete_territories(store)

    report = WipeReport(
        users_reset=len(reset_ids),
        feed_items_deleted=len(feed),
        activities_deleted=len(activities),
        territories_deleted=len(territories),
    )
    logger.warning(
        "master_wipe_completed",
        users_reset=report.users_reset,
        feed_items=report.feed_items_deleted,
        activities=report.activities_deleted,
        territories=report.territories_deleted,
    )
    return report
