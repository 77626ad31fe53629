"""Activity session entity and its nested value types."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from tadmin.coercion import utcnow

DEFAULT_ACTIVITY_TYPE = "otherOutdoor"


class RoutePoint(BaseModel):
    latitude: float = 0.0
    longitude: float = 0.0
    timestamp: datetime | None = None


class XPBreakdown(BaseModel):
    """XP awarded for an activity.

    ``total`` is the figure reported by the game client. It is stored next to
    the components and is not guaranteed to equal their sum.
    """

    xp_base: int = 0
    xp_territory: int = 0
    xp_streak: int = 0
    xp_weekly_record: int = 0
    xp_badges: int = 0
    total: int = 0

    @property
    def computed_total(self) -> int:
        return self.xp_base + self.xp_territory + self.xp_streak + self.xp_weekly_record + self.xp_badges

    @property
    def has_discrepancy(self) -> bool:
        """True when a non-zero reported total disagrees with the component sum."""
        return self.total != 0 and self.total != self.computed_total


class TerritoryStats(BaseModel):
    new_cells_count: int = 0
    defended_cells_count: int = 0
    recaptured_cells_count: int = 0


class Mission(BaseModel):
    id: str
    user_id: str = ""
    category: str = ""
    name: str = ""
    description: str = ""
    rarity: str = ""


class ActivitySession(BaseModel):
    """A recorded workout, written by the game client and read-only here."""

    id: str | None = None
    start_date: datetime = Field(default_factory=utcnow)
    end_date: datetime = Field(default_factory=utcnow)
    activity_type: str = DEFAULT_ACTIVITY_TYPE
    distance_meters: float = 0.0
    duration_seconds: float = 0.0
    route: list[RoutePoint] = Field(default_factory=list)
    xp_breakdown: XPBreakdown = Field(default_factory=XPBreakdown)
    territory_stats: TerritoryStats = Field(default_factory=TerritoryStats)
    missions: list[Mission] = Field(default_factory=list)
    user_id: str = ""

    @property
    def has_territory_impact(self) -> bool:
        stats = self.territory_stats
        return stats.new_cells_count > 0 or stats.defended_cells_count > 0 or stats.recaptured_cells_count > 0
