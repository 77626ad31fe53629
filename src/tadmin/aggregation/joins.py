"""In-memory joins of independently fetched lists onto their owners.

Joins are total: an owner ID that matches no user yields a pair whose
``user`` is None, never an error.
"""

from __future__ import annotations

from dataclasses import dataclass

from tadmin.activities.schemas import ActivitySession
from tadmin.feed.schemas import FeedItem
from tadmin.territories.schemas import RemoteTerritory
from tadmin.users.schemas import User

UNKNOWN_USER = "Unknown User"


def users_by_id(users: list[User]) -> dict[str, User]:
    """Index users by ID. Later duplicates win; users without an ID are skipped."""
    return {user.id: user for user in users if user.id}


@dataclass(frozen=True)
class _WithUser:
    user: User | None

    @property
    def display_name(self) -> str:
        return self.user.display_name if self.user else UNKNOWN_USER

    @property
    def user_level(self) -> int:
        return self.user.level if self.user else 0

    @property
    def user_xp(self) -> int:
        return self.user.xp if self.user else 0


@dataclass(frozen=True)
class ActivityWithUser(_WithUser):
    activity: ActivitySession


@dataclass(frozen=True)
class FeedItemWithUser(_WithUser):
    feed_item: FeedItem


@dataclass(frozen=True)
class TerritoryWithUser(_WithUser):
    territory: RemoteTerritory


def join_activities_with_users(activities: list[ActivitySession], users: list[User]) -> list[ActivityWithUser]:
    lookup = users_by_id(users)
    return [ActivityWithUser(user=lookup.get(a.user_id), activity=a) for a in activities]


def join_feed_with_users(items: list[FeedItem], users: list[User]) -> list[FeedItemWithUser]:
    lookup = users_by_id(users)
    return [FeedItemWithUser(user=lookup.get(i.user_id), feed_item=i) for i in items]


def join_territories_with_users(territories: list[RemoteTerritory], users: list[User]) -> list[TerritoryWithUser]:
    lookup = users_by_id(users)
    return [TerritoryWithUser(user=lookup.get(t.user_id), territory=t) for t in territories]
