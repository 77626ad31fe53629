"""Follow edge entity."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class FollowRelationship(BaseModel):
    """One side of a follow edge.

    Stored under ``users/{owner}/following/{other}`` and mirrored under
    ``users/{other}/followers/{owner}``; ``id`` is the counterpart's user ID
    and ``display_name`` is a snapshot taken when the edge was written.
    """

    id: str | None = None
    display_name: str = ""
    avatar_url: str | None = None
    followed_at: datetime | None = None


class EdgeState(str, Enum):
    """Consistency of the two stored sides of a follow edge."""

    ABSENT = "absent"
    CONSISTENT = "consistent"
    FOLLOWING_ONLY = "following_only"
    FOLLOWER_ONLY = "follower_only"
