"""Decode/encode ``activities`` documents.

Nested lists decode element-wise: a route point that is not a map is skipped,
and so is a mission without a string ``id``. Everything else falls back to
its default.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tadmin.activities.schemas import (
    DEFAULT_ACTIVITY_TYPE,
    ActivitySession,
    Mission,
    RoutePoint,
    TerritoryStats,
    XPBreakdown,
)
from tadmin.coercion import (
    as_datetime,
    as_float,
    as_int,
    as_list,
    as_mapping,
    as_optional_datetime,
    as_str,
)


def decode_route(raw: Any) -> list[RoutePoint]:
    points = []
    for point in as_list(raw):
        if not isinstance(point, Mapping):
            continue
        points.append(RoutePoint(
            latitude=as_float(point.get("latitude")),
            longitude=as_float(point.get("longitude")),
            timestamp=as_optional_datetime(point.get("timestamp")),
        ))
    return points


def decode_xp_breakdown(raw: Any) -> XPBreakdown:
    xp = as_mapping(raw)
    return XPBreakdown(
        xp_base=as_int(xp.get("xpBase")),
        xp_territory=as_int(xp.get("xpTerritory")),
        xp_streak=as_int(xp.get("xpStreak")),
        xp_weekly_record=as_int(xp.get("xpWeeklyRecord")),
        xp_badges=as_int(xp.get("xpBadges")),
        total=as_int(xp.get("total")),
    )


def decode_territory_stats(raw: Any) -> TerritoryStats:
    stats = as_mapping(raw)
    return TerritoryStats(
        new_cells_count=as_int(stats.get("newCellsCount")),
        defended_cells_count=as_int(stats.get("defendedCellsCount")),
        recaptured_cells_count=as_int(stats.get("recapturedCellsCount")),
    )


def decode_missions(raw: Any) -> list[Mission]:
    missions = []
    for mission in as_list(raw):
        if not isinstance(mission, Mapping):
            continue
        mission_id = mission.get("id")
        if not isinstance(mission_id, str):
            continue
        missions.append(Mission(
            id=mission_id,
            user_id=as_str(mission.get("userId")),
            category=as_str(mission.get("category")),
            name=as_str(mission.get("name")),
            description=as_str(mission.get("description")),
            rarity=as_str(mission.get("rarity")),
        ))
    return missions


def decode_activity(doc_id: str | None, data: dict[str, Any]) -> ActivitySession:
    return ActivitySession(
        id=doc_id,
        start_date=as_datetime(data.get("startDate")),
        end_date=as_datetime(data.get("endDate")),
        activity_type=as_str(data.get("activityType"), DEFAULT_ACTIVITY_TYPE),
        distance_meters=as_float(data.get("distanceMeters")),
        duration_seconds=as_float(data.get("durationSeconds")),
        route=decode_route(data.get("route")),
        xp_breakdown=decode_xp_breakdown(data.get("xpBreakdown")),
        territory_stats=decode_territory_stats(data.get("territoryStats")),
        missions=decode_missions(data.get("missions")),
        user_id=as_str(data.get("userId")),
    )


def _encode_point(point: RoutePoint) -> dict[str, Any]:
    data: dict[str, Any] = {"latitude": point.latitude, "longitude": point.longitude}
    if point.timestamp is not None:
        data["timestamp"] = point.timestamp
    return data


def encode_activity(activity: ActivitySession) -> dict[str, Any]:
    xp = activity.xp_breakdown
    stats = activity.territory_stats
    return {
        "startDate": activity.start_date,
        "endDate": activity.end_date,
        "activityType": activity.activity_type,
        "distanceMeters": activity.distance_meters,
        "durationSeconds": activity.duration_seconds,
        "route": [_encode_point(p) for p in activity.route],
        "xpBreakdown": {
            "xpBase": xp.xp_base,
            "xpTerritory": xp.xp_territory,
            "xpStreak": xp.xp_streak,
            "xpWeeklyRecord": xp.xp_weekly_record,
            "xpBadges": xp.xp_badges,
            "total": xp.total,
        },
        "territoryStats": {
            "newCellsCount": stats.new_cells_count,
            "defendedCellsCount": stats.defended_cells_count,
            "recapturedCellsCount": stats.recaptured_cells_count,
        },
        "missions": [
            {
                "id": m.id,
                "userId": m.user_id,
                "category": m.category,
                "name": m.name,
                "description": m.description,
                "rarity": m.rarity,
            }
            for m in activity.missions
        ],
        "userId": activity.user_id,
    }
