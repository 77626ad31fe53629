"""Feed item entity."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from tadmin.coercion import utcnow


class FeedType(str, Enum):
    """Known feed item types."""

    TERRITORY_CONQUERED = "territoryConquered"
    LEVEL_UP = "levelUp"
    ACHIEVEMENT = "achievement"
    CHALLENGE = "challenge"
    OTHER = "other"


class Rarity(str, Enum):
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


# Stored when a legacy document has no usable type
UNKNOWN_FEED_TYPE = "unknown"


class FeedItem(BaseModel):
    """An entry in the social feed.

    ``type`` and ``rarity`` stay plain strings so values the admin console
    does not know about survive a read-modify-write cycle.
    """

    id: str | None = None
    date: datetime = Field(default_factory=utcnow)
    is_personal: bool = True
    rarity: str = Rarity.COMMON.value
    related_user_name: str = ""
    subtitle: str = ""
    title: str = ""
    type: str = FeedType.OTHER.value
    user_id: str = ""
    xp_earned: int = Field(default=0, ge=0)
