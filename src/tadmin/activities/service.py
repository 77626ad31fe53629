"""Activity session repository operations.

Activities are written by the game client; the admin core only reads and
deletes them. Deleting with subcollections lives in
:mod:`tadmin.maintenance.cascade`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tadmin import collections
from tadmin.activities.decoding import decode_activity
from tadmin.activities.schemas import ActivitySession
from tadmin.store import documents

if TYPE_CHECKING:
    from tadmin.store.base import DocumentStore

KIND = "Activity"


async def fetch_activities(store: DocumentStore, user_id: str | None = None) -> list[ActivitySession]:
    return await documents.fetch_all(store, collections.ACTIVITIES, decode_activity, user_id=user_id)


async def fetch_activity(store: DocumentStore, activity_id: str) -> ActivitySession | None:
    return await documents.fetch_one(store, collections.ACTIVITIES, activity_id, decode_activity)


async def delete_activity(store: DocumentStore, activity_id: str | None) -> None:
    """Delete the activity document alone (subcollections are left behind)."""
    await documents.delete(store, collections.ACTIVITIES, activity_id, KIND)
