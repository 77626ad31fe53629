"""Tolerant coercion of raw document values.

Documents come back from the store as loosely typed maps: numbers may be
boxed by the driver, timestamps may be native datetimes, Firestore
``DatetimeWithNanoseconds``, protobuf ``Timestamp`` objects, epoch seconds or
ISO strings, and legacy documents may hold the wrong type entirely.

Every helper here takes the raw value plus a default and never raises.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def as_float(value: Any, default: float = 0.0) -> float:
    """Coerce a native or boxed numeric value to float."""
    if value is None or isinstance(value, bool):
        return default
    if _is_number(value):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return default
    if hasattr(value, "__float__"):
        try:
            return float(value)
        except (TypeError, ValueError):
            return default
    return default


def _parse_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)
    try:
        if isinstance(value, Decimal):
            return int(value)
        if isinstance(value, str):
            return int(Decimal(value.strip()))
        if hasattr(value, "__int__"):
            return int(value)
    except (InvalidOperation, TypeError, ValueError, OverflowError):
        return None
    return None


def as_int(value: Any, default: int = 0) -> int:
    """Coerce a native or boxed numeric value to int (fractions truncate)."""
    parsed = _parse_int(value)
    return default if parsed is None else parsed


def as_optional_int(value: Any) -> int | None:
    return _parse_int(value)


def as_str(value: Any, default: str = "") -> str:
    """Return ``value`` if it is a string, ``default`` otherwise."""
    return value if isinstance(value, str) else default


def as_optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def as_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    return default


def as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def as_optional_datetime(value: Any) -> datetime | None:
    """Decode a timestamp-like value to an aware UTC datetime, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _to_utc(value)
    # google.protobuf.timestamp_pb2.Timestamp
    to_datetime = getattr(value, "ToDatetime", None)
    if callable(to_datetime):
        try:
            return _to_utc(to_datetime())
        except (TypeError, ValueError, OverflowError):
            return None
    if _is_number(value):
        try:
            return datetime.fromtimestamp(float(value), tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return _to_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def as_datetime(value: Any, default: datetime | None = None) -> datetime:
    """Decode a required timestamp; falls back to ``default`` or now."""
    decoded = as_optional_datetime(value)
    if decoded is not None:
        return decoded
    return default if default is not None else utcnow()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
