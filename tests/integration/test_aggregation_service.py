"""Joined, ordered lists loaded from the store."""

from datetime import datetime, timedelta, timezone

from tadmin import collections
from tadmin.aggregation.joins import UNKNOWN_USER
from tadmin.aggregation.service import (
    load_activities_with_users,
    load_feed_with_users,
    load_territories_with_users,
)

T0 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class TestLoadJoined:
    """Both sides fetched, joined and ordered newest first."""

    async def test_activities(self, store):
        store.seed(collections.USERS, "u1", {"displayName": "Ana", "level": 5, "xp": 900})
        store.seed(collections.ACTIVITIES, "old", {"userId": "u1", "endDate": T0})
        store.seed(collections.ACTIVITIES, "new", {"userId": "ghost", "endDate": T0 + timedelta(hours=2)})

        pairs = await load_activities_with_users(store)

        assert [p.activity.id for p in pairs] == ["new", "old"]
        assert pairs[0].display_name == UNKNOWN_USER
        assert (pairs[1].display_name, pairs[1].user_level, pairs[1].user_xp) == ("Ana", 5, 900)

    async def test_feed_for_one_user(self, store):
        store.seed(collections.USERS, "u1", {"displayName": "Ana"})
        store.seed(collections.FEED, "f1", {"userId": "u1", "date": T0})
        store.seed(collections.FEED, "f2", {"userId": "u1", "date": T0 + timedelta(days=1)})
        store.seed(collections.FEED, "f3", {"userId": "u2", "date": T0})

        pairs = await load_feed_with_users(store, "u1")

        assert [p.feed_item.id for p in pairs] == ["f2", "f1"]
        assert all(p.display_name == "Ana" for p in pairs)

    async def test_territories(self, store):
        store.seed(collections.TERRITORIES, "t1", {"userId": "u9", "timestamp": T0})

        pairs = await load_territories_with_users(store)

        assert len(pairs) == 1
        assert pairs[0].user is None
