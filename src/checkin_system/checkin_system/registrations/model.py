from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import RegistrationStatus


@dataclass(frozen=True)
class RegistrationEntry:
    """One Attendance Log row; a team has at most one."""

    team_id: str
    team_name: str
    check_in_time: datetime
    status: RegistrationStatus = RegistrationStatus.PRESENT
