"""Decode/encode territory and territory-change documents."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tadmin.coercion import (
    as_datetime,
    as_float,
    as_list,
    as_optional_datetime,
    as_optional_str,
    as_str,
)
from tadmin.territories.schemas import Coordinate, RemoteTerritory, TerritoryChange


def decode_boundary(raw: Any) -> list[Coordinate]:
    return [
        Coordinate(latitude=as_float(p.get("latitude")), longitude=as_float(p.get("longitude")))
        for p in as_list(raw)
        if isinstance(p, Mapping)
    ]


def decode_territory(doc_id: str | None, data: dict[str, Any]) -> RemoteTerritory:
    return RemoteTerritory(
        id=doc_id,
        boundary=decode_boundary(data.get("boundary")),
        center_latitude=as_float(data.get("centerLatitude")),
        center_longitude=as_float(data.get("centerLongitude")),
        expires_at=as_datetime(data.get("expiresAt")),
        timestamp=as_datetime(data.get("timestamp")),
        activity_end_at=as_optional_datetime(data.get("activityEndAt")),
        user_id=as_str(data.get("userId")),
    )


def encode_territory(territory: RemoteTerritory) -> dict[str, Any]:
    data: dict[str, Any] = {
        "boundary": [{"latitude": c.latitude, "longitude": c.longitude} for c in territory.boundary],
        "centerLatitude": territory.center_latitude,
        "centerLongitude": territory.center_longitude,
        "expiresAt": territory.expires_at,
        "timestamp": territory.timestamp,
        "userId": territory.user_id,
    }
    if territory.activity_end_at is not None:
        data["activityEndAt"] = territory.activity_end_at
    return data


_CHANGE_OPTIONAL_IDS = {
    "territory_id": "territoryId",
    "new_activity_id": "newActivityId",
    "new_user_id": "newUserId",
    "previous_activity_id": "previousActivityId",
    "previous_user_id": "previousUserId",
}


def decode_territory_change(doc_id: str | None, data: dict[str, Any]) -> TerritoryChange:
    return TerritoryChange(
        id=doc_id,
        change_type=as_str(data.get("changeType")),
        changed_at=as_datetime(data.get("changedAt")),
        activity_end_at=as_optional_datetime(data.get("activityEndAt")),
        expires_at=as_optional_datetime(data.get("expiresAt")),
        **{attr: as_optional_str(data.get(key)) for attr, key in _CHANGE_OPTIONAL_IDS.items()},
    )


def encode_territory_change(change: TerritoryChange) -> dict[str, Any]:
    data: dict[str, Any] = {
        "changeType": change.change_type,
        "changedAt": change.changed_at,
    }
    if change.activity_end_at is not None:
        data["activityEndAt"] = change.activity_end_at
    if change.expires_at is not None:
        data["expiresAt"] = change.expires_at
    for attr, key in _CHANGE_OPTIONAL_IDS.items():
        value = getattr(change, attr)
        if value is not None:
            data[key] = value
    return data
