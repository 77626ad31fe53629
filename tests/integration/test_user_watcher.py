"""Live users subscription."""

from tadmin import collections
from tadmin.users.watcher import UserWatcher, watch_users


class TestWatchUsers:
    """Raw subscription helper."""

    async def test_delivers_full_decoded_lists(self, store):
        store.seed(collections.USERS, "u1", {"displayName": "Ana", "xp": "10"})
        received = []

        subscription = watch_users(store, received.append)
        await store.set_merge(collections.USERS, "u2", {"displayName": "Bea"})
        subscription.cancel()
        subscription.cancel()

        assert [[u.id for u in users] for users in received] == [["u1"], ["u1", "u2"]]
        assert received[0][0].xp == 10
        assert not subscription.active


class TestUserWatcher:
    """Owned subscription with start/stop/reload."""

    async def test_initial_snapshot(self, store):
        store.seed(collections.USERS, "u1", {"displayName": "Ana"})
        watcher = UserWatcher(store)

        watcher.start()
        users = await watcher.wait_for_snapshot()

        assert watcher.running
        assert [u.display_name for u in users] == ["Ana"]
        assert watcher.snapshot_count == 1
        watcher.stop()

    async def test_snapshot_replaces_list(self, store):
        store.seed(collections.USERS, "u1", {"displayName": "Ana"})
        seen = []
        watcher = UserWatcher(store, on_change=seen.append)
        watcher.start()

        await store.delete(collections.USERS, "u1")

        assert watcher.users == []
        assert len(seen) == 2
        watcher.stop()

    async def test_stop_is_idempotent(self, store):
        watcher = UserWatcher(store)
        watcher.stop()
        watcher.start()
        watcher.stop()
        watcher.stop()

        await store.set_merge(collections.USERS, "u1", {"displayName": "Ana"})

        assert not watcher.running
        assert watcher.users == []
        assert watcher.snapshot_count == 1

    async def test_start_twice_keeps_one_listener(self, store):
        watcher = UserWatcher(store)
        watcher.start()
        watcher.start()

        await store.set_merge(collections.USERS, "u1", {"displayName": "Ana"})

        assert watcher.snapshot_count == 2
        watcher.stop()

    async def test_reload_resubscribes(self, store):
        store.seed(collections.USERS, "u1", {"displayName": "Ana"})
        watcher = UserWatcher(store)
        watcher.start()

        watcher.reload()

        assert watcher.running
        assert watcher.snapshot_count == 2
        await store.set_merge(collections.USERS, "u2", {"displayName": "Bea"})
        assert watcher.snapshot_count == 3
        assert len(watcher.users) == 2
        watcher.stop()

    async def test_context_manager(self, store):
        with UserWatcher(store) as watcher:
            assert watcher.running
        assert not watcher.running
