from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

__all__ = [
    "utc_now",
    "utc_iso",
    "parse_iso",
    "as_utc",
    "coerce_timestamp",
]

def utc_now() -> datetime:
    """Timezone-aware UTC now."""
    return datetime.now(timezone.utc)

def utc_iso(dt: Optional[datetime] = None) -> str:
    """RFC3339 / ISO8601 with trailing Z."""
    dt = dt or utc_now()
    return as_utc(dt).isoformat().replace("+00:00", "Z")

def as_utc(dt: datetime) -> datetime:
    """Aware UTC datetime. Naive input is taken as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

def parse_iso(s: str) -> Optional[datetime]:
    """Parse ISO string to aware datetime (UTC). Returns None on failure."""
    if not s:
        return None
    try:
        # support both Z and +00:00
        s = s.strip()
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        return as_utc(datetime.fromisoformat(s))
    except ValueError:
        return None

def coerce_timestamp(value: Any) -> datetime:
    """
    datetime | date | ISO string | epoch seconds -> aware UTC datetime.
    Raises ValueError when the value can't be read as a point in time.
    """
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str):
        dt = parse_iso(value)
        if dt is None:
            raise ValueError(f"unreadable timestamp: {value!r}")
        return dt
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    raise ValueError(f"unsupported timestamp type: {type(value).__name__}")
