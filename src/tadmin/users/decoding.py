"""Decode/encode ``users`` documents."""

from __future__ import annotations

from typing import Any

from tadmin.coercion import (
    as_datetime,
    as_int,
    as_optional_datetime,
    as_optional_int,
    as_optional_str,
    as_str,
)
from tadmin.users.schemas import User


def decode_user(doc_id: str | None, data: dict[str, Any]) -> User:
    return User(
        id=doc_id,
        display_name=as_str(data.get("displayName")),
        email=as_optional_str(data.get("email")),
        avatar_url=as_optional_str(data.get("avatarURL")),
        joined_at=as_datetime(data.get("joinedAt")),
        last_updated=as_optional_datetime(data.get("lastUpdated")),
        level=max(1, as_int(data.get("level"), 1)),
        xp=max(0, as_int(data.get("xp"), 0)),
        previous_rank=as_optional_int(data.get("previousRank")),
        force_logout_version=as_optional_int(data.get("forceLogoutVersion")),
    )


def encode_user(user: User) -> dict[str, Any]:
    data: dict[str, Any] = {
        "displayName": user.display_name,
        "joinedAt": user.joined_at,
        "level": user.level,
        "xp": user.xp,
    }
    optional = {
        "email": user.email,
        "avatarURL": user.avatar_url,
        "lastUpdated": user.last_updated,
        "previousRank": user.previous_rank,
        "forceLogoutVersion": user.force_logout_version,
    }
    data.update({k: v for k, v in optional.items() if v is not None})
    return data
