from __future__ import annotations

from datetime import datetime
from typing import Optional


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def format_check_in_time(value: Optional[datetime]) -> str:
    """Format like the dashboard does: '19 Oct 2026, 3:05 pm'."""
    if value is None:
        return "-"
    hour = value.hour % 12 or 12
    suffix = "am" if value.hour < 12 else "pm"
    return f"{value.day} {value.strftime('%b %Y')}, {hour}:{value.minute:02d} {suffix}"
