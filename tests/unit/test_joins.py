"""In-memory joins onto owning users."""

from tadmin.aggregation.joins import (
    UNKNOWN_USER,
    join_activities_with_users,
    join_feed_with_users,
    join_territories_with_users,
    users_by_id,
)


class TestUsersById:
    """Owner lookup table."""

    def test_last_duplicate_wins(self, make_user):
        first = make_user("u1", display_name="Old")
        second = make_user("u1", display_name="New")
        assert users_by_id([first, second])["u1"].display_name == "New"

    def test_users_without_id_are_skipped(self, make_user):
        assert users_by_id([make_user(None)]) == {}


class TestJoins:
    """Joins are total: unmatched owners never raise."""

    def test_matched_activity(self, make_user, make_activity):
        pairs = join_activities_with_users([make_activity(user_id="u1")], [make_user("u1", level=7, xp=3000)])
        assert pairs[0].user is not None
        assert pairs[0].display_name == "Runner u1"
        assert pairs[0].user_level == 7
        assert pairs[0].user_xp == 3000

    def test_unmatched_owner(self, make_user, make_activity):
        pairs = join_activities_with_users([make_activity(user_id="ghost")], [make_user("u1")])
        assert len(pairs) == 1
        assert pairs[0].user is None
        assert pairs[0].display_name == UNKNOWN_USER
        assert pairs[0].user_level == 0
        assert pairs[0].user_xp == 0

    def test_empty_owner_id(self, make_user, make_feed_item):
        pairs = join_feed_with_users([make_feed_item(user_id="")], [make_user("u1")])
        assert pairs[0].user is None

    def test_order_is_preserved(self, make_user, make_territory):
        territories = [make_territory("t1", user_id="u2"), make_territory("t2", user_id="u1")]
        pairs = join_territories_with_users(territories, [make_user("u1"), make_user("u2")])
        assert [p.territory.id for p in pairs] == ["t1", "t2"]
        assert [p.user.id for p in pairs] == ["u2", "u1"]

    def test_no_users_at_all(self, make_feed_item):
        pairs = join_feed_with_users([make_feed_item("f1"), make_feed_item("f2")], [])
        assert all(p.display_name == UNKNOWN_USER for p in pairs)
