"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from tadmin.activities.schemas import ActivitySession, TerritoryStats, XPBreakdown
from tadmin.config import get_settings
from tadmin.feed.schemas import FeedItem
from tadmin.store.memory import InMemoryStore
from tadmin.territories.schemas import Coordinate, RemoteTerritory
from tadmin.users.schemas import User

T0 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)

SQUARE = [
    Coordinate(latitude=40.0, longitude=-3.0),
    Coordinate(latitude=40.0, longitude=-2.99),
    Coordinate(latitude=40.01, longitude=-2.99),
    Coordinate(latitude=40.01, longitude=-3.0),
]


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; reset around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def make_user():
    def _make(user_id: str | None = "u1", **overrides) -> User:
        fields = {
            "id": user_id,
            "display_name": f"Runner {user_id}",
            "email": f"{user_id}@example.com",
            "joined_at": T0,
            "level": 4,
            "xp": 1200,
        }
        fields.update(overrides)
        return User(**fields)

    return _make


@pytest.fixture
def make_activity():
    def _make(activity_id: str | None = "a1", user_id: str = "u1", **overrides) -> ActivitySession:
        fields = {
            "id": activity_id,
            "start_date": T0,
            "end_date": T0 + timedelta(minutes=45),
            "activity_type": "run",
            "distance_meters": 7500.0,
            "duration_seconds": 2700.0,
            "xp_breakdown": XPBreakdown(xp_base=100, xp_territory=40, total=140),
            "territory_stats": TerritoryStats(new_cells_count=3),
            "user_id": user_id,
        }
        fields.update(overrides)
        return ActivitySession(**fields)

    return _make


@pytest.fixture
def make_feed_item():
    def _make(item_id: str | None = "f1", user_id: str = "u1", **overrides) -> FeedItem:
        fields = {
            "id": item_id,
            "date": T0,
            "title": "Conquered 3 cells",
            "subtitle": "Retiro park",
            "type": "territoryConquered",
            "rarity": "rare",
            "user_id": user_id,
            "xp_earned": 40,
        }
        fields.update(overrides)
        return FeedItem(**fields)

    return _make


@pytest.fixture
def make_territory():
    def _make(territory_id: str | None = "t1", user_id: str = "u1", **overrides) -> RemoteTerritory:
        fields = {
            "id": territory_id,
            "boundary": list(SQUARE),
            "center_latitude": 40.005,
            "center_longitude": -2.995,
            "expires_at": T0 + timedelta(days=7),
            "timestamp": T0,
            "user_id": user_id,
        }
        fields.update(overrides)
        return RemoteTerritory(**fields)

    return _make
