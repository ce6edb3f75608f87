"""
Timezone normalization and display formatting.

Record timestamps (`lastUpdated`) are always timezone-aware so that sorting never
mixes naive and aware datetimes. Naive inputs are assumed to be UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo


def ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to a naive datetime; leave aware datetimes unchanged."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_local(dt: datetime, tz_name: str) -> str:
    """Format as `dd/mm/yyyy, HH:MM` in the given timezone (table display)."""
    return ensure_utc(dt).astimezone(ZoneInfo(tz_name)).strftime("%d/%m/%Y, %H:%M")
