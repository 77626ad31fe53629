"""Follow edges are written and removed on both sides atomically."""

from datetime import datetime, timezone

import pytest

from tadmin import collections
from tadmin.errors import FollowEdgeError, MissingIdentifierError
from tadmin.social.schemas import EdgeState
from tadmin.social.service import (
    edge_state,
    fetch_followers,
    fetch_following,
    follow,
    remove_follower,
    unfollow,
)

T0 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class TestFollow:
    """Creating an edge."""

    async def test_both_sides_written(self, store, make_user):
        ana, bea = make_user("ana", display_name="Ana"), make_user("bea", display_name="Bea")

        await follow(store, ana, bea, now=T0)

        following = await fetch_following(store, "ana")
        followers = await fetch_followers(store, "bea")
        assert [(e.id, e.display_name, e.followed_at) for e in following] == [("bea", "Bea", T0)]
        assert [(e.id, e.display_name) for e in followers] == [("ana", "Ana")]
        assert await edge_state(store, "ana", "bea") == EdgeState.CONSISTENT

    async def test_batch_failure_writes_neither_side(self, store, make_user):
        store.fail("set", collections.followers_of("bea"), message="permission denied")

        with pytest.raises(FollowEdgeError, match="permission denied"):
            await follow(store, make_user("ana"), make_user("bea"))

        assert await edge_state(store, "ana", "bea") == EdgeState.ABSENT

    async def test_missing_id(self, store, make_user):
        with pytest.raises(MissingIdentifierError):
            await follow(store, make_user("ana"), make_user(None))
        assert store.calls == []


class TestUnfollow:
    """Removing an edge from either end."""

    async def test_unfollow(self, store, make_user):
        await follow(store, make_user("ana"), make_user("bea"))
        await unfollow(store, "ana", "bea")
        assert await edge_state(store, "ana", "bea") == EdgeState.ABSENT

    async def test_remove_follower(self, store, make_user):
        await follow(store, make_user("ana"), make_user("bea"))
        await remove_follower(store, "bea", "ana")
        assert await fetch_following(store, "ana") == []
        assert await fetch_followers(store, "bea") == []

    async def test_remove_follower_failure(self, store, make_user):
        await follow(store, make_user("ana"), make_user("bea"))
        store.fail("batch", "")

        with pytest.raises(FollowEdgeError):
            await remove_follower(store, "bea", "ana")

        assert await edge_state(store, "ana", "bea") == EdgeState.CONSISTENT

    async def test_unfollow_absent_edge_succeeds(self, store):
        await unfollow(store, "ana", "bea")


class TestEdgeState:
    """Legacy one-sided edges are detected."""

    async def test_following_only(self, store):
        store.seed(collections.following_of("ana"), "bea", {"displayName": "Bea"})
        assert await edge_state(store, "ana", "bea") == EdgeState.FOLLOWING_ONLY

    async def test_follower_only(self, store):
        store.seed(collections.followers_of("bea"), "ana", {"displayName": "Ana"})
        assert await edge_state(store, "ana", "bea") == EdgeState.FOLLOWER_ONLY

    async def test_unfollow_repairs_one_sided_edge(self, store):
        store.seed(collections.following_of("ana"), "bea", {"displayName": "Bea"})
        await unfollow(store, "ana", "bea")
        assert await edge_state(store, "ana", "bea") == EdgeState.ABSENT
