"""Reference orderings, list filters and XP totals.

Everything here is a pure single pass over already-loaded lists. Totals are
recomputed on every call.
"""

from __future__ import annotations

from collections.abc import Iterable

from tadmin.activities.schemas import ActivitySession
from tadmin.feed.schemas import FeedItem, FeedType
from tadmin.territories.schemas import RemoteTerritory
from tadmin.users.schemas import User


def sort_activities(activities: Iterable[ActivitySession]) -> list[ActivitySession]:
    return sorted(activities, key=lambda a: a.end_date, reverse=True)


def sort_feed_items(items: Iterable[FeedItem]) -> list[FeedItem]:
    return sorted(items, key=lambda i: i.date, reverse=True)


def sort_territories(territories: Iterable[RemoteTerritory]) -> list[RemoteTerritory]:
    return sorted(territories, key=lambda t: t.timestamp, reverse=True)


def sort_users(users: Iterable[User]) -> list[User]:
    return sorted(users, key=lambda u: u.joined_at, reverse=True)


def total_activity_xp(activities: Iterable[ActivitySession]) -> int:
    """Sum of the reported ``xpBreakdown.total`` of each activity."""
    return sum(a.xp_breakdown.total for a in activities)


def total_feed_xp(items: Iterable[FeedItem]) -> int:
    return sum(i.xp_earned for i in items)


def filter_feed_items(
    items: Iterable[FeedItem],
    feed_type: FeedType | str | None = None,
    search: str = "",
) -> list[FeedItem]:
    """Filter by exact type and a case-insensitive search over title, subtitle and owner ID."""
    wanted_type = feed_type.value if isinstance(feed_type, FeedType) else feed_type
    needle = search.strip().casefold()

    result = []
    for item in items:
        if wanted_type is not None and item.type != wanted_type:
            continue
        if needle and not any(needle in field.casefold() for field in (item.title, item.subtitle, item.user_id)):
            continue
        result.append(item)
    return result


def filter_users(users: Iterable[User], search: str = "") -> list[User]:
    """Case-insensitive search over display name and email."""
    needle = search.strip().casefold()
    if not needle:
        return list(users)
    return [
        u for u in users
        if needle in u.display_name.casefold() or (u.email is not None and needle in u.email.casefold())
    ]


def filter_activities_by_user(activities: Iterable[ActivitySession], user_id: str | None) -> list[ActivitySession]:
    if user_id is None:
        return list(activities)
    return [a for a in activities if a.user_id == user_id]
