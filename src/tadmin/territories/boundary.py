"""Edit-layer rules for territory polygons.

A boundary is a closed polygon and needs at least three points. Edits that
would go below that are refused rather than silently producing an invalid
territory.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from tadmin.coercion import utcnow
from tadmin.config import get_settings
from tadmin.errors import BoundaryTooSmallError, InvalidEntityError
from tadmin.territories.schemas import Coordinate, RemoteTerritory

MIN_BOUNDARY_POINTS = 3


def add_boundary_point(points: list[Coordinate], point: Coordinate | None = None) -> list[Coordinate]:
    """Return a new boundary with ``point`` (default 0,0) appended."""
    return [*points, point if point is not None else Coordinate()]


def remove_boundary_point(points: list[Coordinate], index: int) -> list[Coordinate]:
    """Return a new boundary without the point at ``index``.

    Raises:
        BoundaryTooSmallError: If the boundary already has the minimum number of points.
        IndexError: If ``index`` is out of range.
    """
    if len(points) <= MIN_BOUNDARY_POINTS:
        msg = f"A territory must have at least {MIN_BOUNDARY_POINTS} boundary points"
        raise BoundaryTooSmallError(msg)
    if not -len(points) <= index < len(points):
        msg = f"Boundary point index out of range: {index}"
        raise IndexError(msg)
    remaining = list(points)
    del remaining[index]
    return remaining


def is_valid_territory(territory: RemoteTerritory) -> bool:
    return bool(territory.user_id) and len(territory.boundary) >= MIN_BOUNDARY_POINTS


def validate_territory(territory: RemoteTerritory) -> None:
    if not territory.user_id:
        msg = "Territory owner is required"
        raise InvalidEntityError(msg)
    if len(territory.boundary) < MIN_BOUNDARY_POINTS:
        msg = f"A territory must have at least {MIN_BOUNDARY_POINTS} boundary points"
        raise BoundaryTooSmallError(msg)


def new_territory(
    user_id: str,
    boundary: list[Coordinate],
    center_latitude: float,
    center_longitude: float,
    now: datetime | None = None,
    ttl_days: int | None = None,
) -> RemoteTerritory:
    """Build an unsaved territory stamped ``now`` and expiring after the default TTL."""
    now = now or utcnow()
    if ttl_days is None:
        ttl_days = get_settings().territory_default_ttl_days
    return RemoteTerritory(
        boundary=list(boundary),
        center_latitude=center_latitude,
        center_longitude=center_longitude,
        expires_at=now + timedelta(days=ttl_days),
        timestamp=now,
        user_id=user_id,
    )
