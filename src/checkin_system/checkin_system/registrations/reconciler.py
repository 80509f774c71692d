from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.enums import RegistrationStatus
from ..teams.repository import TeamRepository
from .model import RegistrationEntry
from .repository import RegistrationRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileReport:
    added: int
    updated: int
    marked_absent: int
    unchanged: int


class AttendanceLogReconciler:
    """Rebuild the Attendance Log projection from the roster.

    Only the log is written; the roster is authoritative and never touched.
    """

    def __init__(self, teams: TeamRepository, registrations: RegistrationRepository):
        self._teams = teams
        self._registrations = registrations

    def reconcile(self) -> ReconcileReport:
        teams = {t.team_id: t for t in self._teams.list_all()}
        entries = {e.team_id: e for e in self._registrations.list_all()}

        added = updated = marked_absent = unchanged = 0

        for team in teams.values():
            if not team.is_checked_in:
                continue
            wanted = RegistrationEntry(
                team_id=team.team_id,
                team_name=team.team_name,
                check_in_time=team.check_in_time,
                status=RegistrationStatus.PRESENT,
            )
            current = entries.get(team.team_id)
            if current == wanted:
                unchanged += 1
                continue
            self._registrations.upsert(wanted)
            if current is None:
                added += 1
            else:
                updated += 1

        for entry in entries.values():
            if entry.status is not RegistrationStatus.PRESENT:
                continue
            team = teams.get(entry.team_id)
            if team is None or not team.is_checked_in:
                self._registrations.mark_absent(entry.team_id)
                marked_absent += 1

        report = ReconcileReport(added=added, updated=updated, marked_absent=marked_absent, unchanged=unchanged)
        logger.info("Attendance log reconciled: %s", report)
        return report
