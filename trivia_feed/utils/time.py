"""
Time helpers — UTC timestamps and fractional day differences.
"""

from datetime import datetime, timezone
from typing import Optional

SECONDS_PER_DAY = 60 * 60 * 24


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def days_between(earlier: Optional[datetime], later: datetime) -> float:
    """
    Fractional days from earlier to later.

    A missing earlier timestamp means "never", measured from the Unix epoch.
    """
    if earlier is None:
        earlier = datetime.fromtimestamp(0, timezone.utc)
    delta = ensure_utc(later) - ensure_utc(earlier)
    return delta.total_seconds() / SECONDS_PER_DAY
