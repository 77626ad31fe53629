"""Decode/encode ``feed`` documents."""

from __future__ import annotations

from typing import Any

from tadmin.coercion import as_bool, as_datetime, as_int, as_str
from tadmin.feed.schemas import UNKNOWN_FEED_TYPE, FeedItem, Rarity


def decode_feed_item(doc_id: str | None, data: dict[str, Any]) -> FeedItem:
    return FeedItem(
        id=doc_id,
        date=as_datetime(data.get("date")),
        is_personal=as_bool(data.get("isPersonal"), True),
        rarity=as_str(data.get("rarity"), Rarity.COMMON.value),
        related_user_name=as_str(data.get("relatedUserName")),
        subtitle=as_str(data.get("subtitle")),
        title=as_str(data.get("title")),
        type=as_str(data.get("type"), UNKNOWN_FEED_TYPE),
        user_id=as_str(data.get("userId")),
        xp_earned=max(0, as_int(data.get("xpEarned"))),
    )


def encode_feed_item(item: FeedItem) -> dict[str, Any]:
    return {
        "date": item.date,
        "isPersonal": item.is_personal,
        "rarity": item.rarity,
        "relatedUserName": item.related_user_name,
        "subtitle": item.subtitle,
        "title": item.title,
        "type": item.type,
        "userId": item.user_id,
        "xpEarned": item.xp_earned,
    }
