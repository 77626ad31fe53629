"""User entity."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from tadmin.coercion import utcnow


class User(BaseModel):
    """A player account as stored in ``users``."""

    id: str | None = None
    display_name: str = ""
    email: str | None = None
    avatar_url: str | None = None
    joined_at: datetime = Field(default_factory=utcnow)
    last_updated: datetime | None = None
    level: int = Field(default=1, ge=1)
    xp: int = Field(default=0, ge=0)
    previous_rank: int | None = None
    force_logout_version: int | None = None
