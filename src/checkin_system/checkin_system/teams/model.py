from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class TeamRecord:
    """A selected team as held in the Roster Store.

    Invariant: is_checked_in is True exactly when check_in_time is set.
    """

    team_id: str
    team_name: str
    college: str = ""
    members: tuple[str, ...] = field(default_factory=tuple)
    contact_number: str = ""
    email: str = ""
    is_checked_in: bool = False
    check_in_time: Optional[datetime] = None


@dataclass(frozen=True)
class TeamCounts:
    """Read-model for dashboard counters."""

    total: int
    checked_in: int
