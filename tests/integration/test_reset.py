"""Per-user reset and the master wipe."""

import pytest

from tadmin import collections
from tadmin.errors import MissingIdentifierError, PartialCascadeError
from tadmin.maintenance.reset_service import master_wipe_all_data, reset_user_data
from tadmin.social.service import follow, fetch_followers


def _seed_world(store):
    """Two players, each owning one feed item, one activity and one territory."""
    for user_id, xp, level in (("u1", 4200, 9), ("u2", 800, 3)):
        store.seed(collections.USERS, user_id, {"displayName": user_id.upper(), "xp": xp, "level": level, "fcmToken": "t"})
        store.seed(collections.FEED, f"f-{user_id}", {"userId": user_id, "title": "x"})
        store.seed(collections.ACTIVITIES, f"a-{user_id}", {"userId": user_id})
        store.seed(f"activities/a-{user_id}/routePoints", "p1", {"latitude": 1.0})
        store.seed(collections.TERRITORIES, f"t-{user_id}", {"userId": user_id})
        store.seed(collections.territory_owners(f"t-{user_id}"), "c1", {"changeType": "conquered"})


class TestResetUserData:
    """Resetting one player."""

    async def test_progress_and_owned_data_removed(self, store, make_user):
        _seed_world(store)
        user = make_user("u1", xp=4200, level=9)

        report = await reset_user_data(store, user)

        doc = store.documents(collections.USERS)["u1"]
        assert doc["xp"] == 0
        assert doc["level"] == 1
        assert doc["fcmToken"] == "t"
        assert "f-u1" not in store.documents(collections.FEED)
        assert "a-u1" not in store.documents(collections.ACTIVITIES)
        assert store.documents("activities/a-u1/routePoints") == {}
        assert "t-u1" not in store.documents(collections.TERRITORIES)
        assert store.documents(collections.territory_owners("t-u1")) == {}
        assert (report.feed_items_deleted, report.activities_deleted, report.territories_deleted) == (1, 1, 1)

    async def test_other_players_untouched(self, store, make_user):
        _seed_world(store)
        await reset_user_data(store, make_user("u1"))

        assert store.documents(collections.USERS)["u2"]["xp"] == 800
        assert "f-u2" in store.documents(collections.FEED)
        assert "a-u2" in store.documents(collections.ACTIVITIES)
        assert "t-u2" in store.documents(collections.TERRITORIES)

    async def test_steps_run_in_order(self, store, make_user):
        _seed_world(store)
        await reset_user_data(store, make_user("u1"))

        touched = [c for op, c, _ in store.calls if op in ("set", "query") and "/" not in c]
        assert touched == [collections.USERS, collections.FEED, collections.ACTIVITIES, collections.TERRITORIES]

    async def test_missing_id(self, store, make_user):
        with pytest.raises(MissingIdentifierError):
            await reset_user_data(store, make_user(None))
        assert store.calls == []

    async def test_failure_stops_before_later_steps(self, store, make_user):
        _seed_world(store)
        store.fail("delete", collections.ACTIVITIES, "a-u1")

        with pytest.raises(PartialCascadeError):
            await reset_user_data(store, make_user("u1"))

        assert store.documents(collections.USERS)["u1"]["xp"] == 0
        assert "f-u1" not in store.documents(collections.FEED)
        assert "t-u1" in store.documents(collections.TERRITORIES)


class TestMasterWipe:
    """Resetting every player at once."""

    async def test_wipe(self, store, make_user):
        _seed_world(store)
        await follow(store, make_user("u1"), make_user("u2"))

        report = await master_wipe_all_data(store)

        users = store.documents(collections.USERS)
        assert set(users) == {"u1", "u2"}
        assert all(u["xp"] == 0 and u["level"] == 1 for u in users.values())
        assert store.documents(collections.FEED) == {}
        assert store.documents(collections.ACTIVITIES) == {}
        assert store.documents(collections.TERRITORIES) == {}
        assert store.documents("activities/a-u2/routePoints") == {}
        assert [f.id for f in await fetch_followers(store, "u2")] == ["u1"]
        assert report.users_reset == 2
        assert report.feed_items_deleted == 2

    async def test_wipe_empty_store(self, store):
        report = await master_wipe_all_data(store)
        assert report.users_reset == 0
        assert report.territories_deleted == 0

    async def test_wipe_writes_only_progress_fields(self, store):
        store.seed(collections.USERS, "legacy", {"displayName": "Old", "xp": 50})

        await master_wipe_all_data(store)

        assert store.documents(collections.USERS)["legacy"] == {"displayName": "Old", "xp": 0, "level": 1}

    async def test_wipe_reports_partial_user_reset(self, store):
        for user_id in ("u1", "u2", "u3"):
            store.seed(collections.USERS, user_id, {"displayName": user_id, "xp": 100})
        store.seed(collections.FEED, "f1", {"userId": "u1"})
        store.fail("set", collections.USERS, "u2")

        with pytest.raises(PartialCascadeError) as exc_info:
            await master_wipe_all_data(store)

        assert exc_info.value.completed_ids == ["u1"]
        assert exc_info.value.failed_id == "u2"
        users = store.documents(collections.USERS)
        assert [users[k]["xp"] for k in ("u1", "u2", "u3")] == [0, 100, 100]
        # Later steps never started
        assert "f1" in store.documents(collections.FEED)
