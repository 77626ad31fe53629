"""Document store collection names.

The store has no DDL. These constants are the single source of truth for the
collection layout written by the game client.
"""

from __future__ import annotations

USERS = "users"
FEED = "feed"
ACTIVITIES = "activities"
# Logical "territories" live under this physical name
TERRITORIES = "remote_territories"

# Subcollections
FOLLOWERS = "followers"
FOLLOWING = "following"
TERRITORY_OWNERS = "owners"


def subcollection(parent: str, parent_id: str, name: str) -> str:
    """Build the slash path of a subcollection under ``parent/parent_id``."""
    return f"{parent}/{parent_id}/{name}"


def followers_of(user_id: str) -> str:
    return subcollection(USERS, user_id, FOLLOWERS)


def following_of(user_id: str) -> str:
    return subcollection(USERS, user_id, FOLLOWING)


def territory_owners(territory_id: str) -> str:
    return subcollection(TERRITORIES, territory_id, TERRITORY_OWNERS)
