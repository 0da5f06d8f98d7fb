from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return current time as tz-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_rfc3339(value: str) -> datetime:
    """
    Parse RFC3339 timestamp string into tz-aware UTC datetime.

    Accepts strings like:
      - 2025-01-01T12:34:56Z
      - 2025-01-01T12:34:56.123Z
      - 2025-01-01T12:34:56+09:00
    """
    if not isinstance(value, str) or not value:
        raise ValueError("RFC3339 value must be a non-empty string")

    s = value.strip()
    # Python's fromisoformat doesn't accept 'Z' in 3.9/3.10, so normalize.
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    dt = datetime.fromisoformat(s)  # raises ValueError if invalid
    if dt.tzinfo is None:
        raise ValueError("naive timestamp is not allowed; offset required")
    return dt.astimezone(timezone.utc)


def to_short_date(dt: datetime) -> str:
    """Format a datetime as an en-US short date in UTC (e.g. 1/5/2025)."""
    dt = dt.astimezone(timezone.utc)
    return f"{dt.month}/{dt.day}/{dt.year}"


def seconds_until(expires_at: datetime, now: datetime) -> int:
    """Whole seconds from now until expires_at, never negative."""
    return max(0, int((expires_at - now).total_seconds()))
