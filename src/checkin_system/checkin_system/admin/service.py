from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import to_iso
from ..teams.model import TeamRecord
from ..teams.repository import TeamRepository


@dataclass(frozen=True)
class TeamStats:
    total: int
    checked_in: int
    pending: int

    def to_dict(self) -> dict:
        return {"total": self.total, "checkedIn": self.checked_in, "pending": self.pending}


class DashboardService:
    """Read-only queries for the admin dashboard; no caching, every call hits the store."""

    def __init__(self, teams: TeamRepository):
        self._teams = teams

    def stats(self) -> TeamStats:
        counts = self._teams.get_counts()
        return TeamStats(
            total=counts.total,
            checked_in=counts.checked_in,
            pending=counts.total - counts.checked_in,
        )

    def list_teams(self, *, search: Optional[str] = None) -> list[TeamRecord]:
        teams = sorted(self._teams.list_all(), key=_dashboard_order)

        needle = (search or "").strip().lower()
        if needle:
            teams = [t for t in teams if needle in t.team_id.lower() or needle in t.team_name.lower()]
        return teams

    def list_teams_ui(self, *, search: Optional[str] = None) -> list[dict]:
        return [admin_team_view(t) for t in self.list_teams(search=search)]


def _dashboard_order(team: TeamRecord):
    # Checked-in first, newest check-in first, then by id.
    if team.is_checked_in and team.check_in_time is not None:
        return (0, -team.check_in_time.timestamp(), team.team_id)
    return (1, 0.0, team.team_id)


def admin_team_view(team: TeamRecord) -> dict:
    return {
        "teamId": team.team_id,
        "teamName": team.team_name,
        "college": team.college,
        "members": list(team.members),
        "contactNumber": team.contact_number,
        "email": team.email,
        "isCheckedIn": team.is_checked_in,
        "checkInTime": to_iso(team.check_in_time),
    }
