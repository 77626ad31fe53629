"""Decode/encode follow edge documents."""

from __future__ import annotations

from typing import Any

from tadmin.coercion import as_optional_datetime, as_optional_str, as_str
from tadmin.social.schemas import FollowRelationship


def decode_follow(doc_id: str | None, data: dict[str, Any]) -> FollowRelationship:
    return FollowRelationship(
        id=doc_id,
        display_name=as_str(data.get("displayName")),
        avatar_url=as_optional_str(data.get("avatarURL")),
        followed_at=as_optional_datetime(data.get("followedAt")),
    )


def encode_follow(edge: FollowRelationship) -> dict[str, Any]:
    data: dict[str, Any] = {"displayName": edge.display_name}
    if edge.avatar_url is not None:
        data["avatarURL"] = edge.avatar_url
    if edge.followed_at is not None:
        data["followedAt"] = edge.followed_at
    return data
