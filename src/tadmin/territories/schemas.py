"""Territory and ownership-history entities."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from tadmin.coercion import utcnow


class Coordinate(BaseModel):
    latitude: float = 0.0
    longitude: float = 0.0


class RemoteTerritory(BaseModel):
    """A captured polygon stored in ``remote_territories``."""

    id: str | None = None
    boundary: list[Coordinate] = Field(default_factory=list)
    center_latitude: float = 0.0
    center_longitude: float = 0.0
    expires_at: datetime = Field(default_factory=utcnow)
    timestamp: datetime = Field(default_factory=utcnow)
    activity_end_at: datetime | None = None
    user_id: str = ""

    def is_expired_at(self, now: datetime) -> bool:
        return self.expires_at < now

    @property
    def is_expired(self) -> bool:
        return self.is_expired_at(utcnow())


class TerritoryChange(BaseModel):
    """One entry of a territory's ownership audit log (``owners`` subcollection)."""

    id: str | None = None
    territory_id: str | None = None
    change_type: str = ""
    changed_at: datetime = Field(default_factory=utcnow)
    activity_end_at: datetime | None = None
    expires_at: datetime | None = None
    new_activity_id: str | None = None
    new_user_id: str | None = None
    previous_activity_id: str | None = None
    previous_user_id: str | None = None
