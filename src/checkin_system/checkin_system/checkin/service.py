from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, NoReturn

from ..common.datetime_utils import now_local, to_iso
from ..common.validators import normalize_team_id
from ..core.enums import RegistrationStatus, UndoPolicy
from ..core.exceptions import AlreadyCheckedInError, IncompleteTeamError, NotCheckedInError, NotFoundError
from ..registrations.model import RegistrationEntry
from ..registrations.repository import RegistrationRepository
from ..teams.model import TeamRecord
from ..teams.repository import TeamRepository

logger = logging.getLogger(__name__)


class CheckInService:
    """Check-in / undo state machine over the Roster Store and Attendance Log.

    The roster flag is the source of truth. Each transition is a single
    conditional update in the roster; the Attendance Log is written afterwards
    on a best-effort basis and a failure there never fails the transition.
    """

    def __init__(
        self,
        teams: TeamRepository,
        registrations: RegistrationRepository,
        *,
        undo_policy: UndoPolicy = UndoPolicy.MARK_ABSENT,
        clock: Callable[[], datetime] = now_local,
    ):
        self._teams = teams
        self._registrations = registrations
        self._undo_policy = UndoPolicy(undo_policy)
        self._clock = clock

    def check_in(self, raw_team_id: Any, *, now: datetime | None = None) -> TeamRecord:
        team_id = normalize_team_id(raw_team_id)
        now = now or self._clock()

        team = self._teams.mark_checked_in(team_id, at=now)
        if team is None:
            self._raise_check_in_rejected(team_id)

        logger.info("Team %s checked in at %s", team.team_id, team.check_in_time)
        self._record_attendance(team)
        return team

    def manual_check_in(self, raw_team_id: Any, *, now: datetime | None = None) -> TeamRecord:
        team = self.check_in(raw_team_id, now=now)
        logger.info("Team %s checked in manually by an operator", team.team_id)
        return team

    def undo_check_in(self, raw_team_id: Any) -> TeamRecord:
        team_id = normalize_team_id(raw_team_id)

        team = self._teams.clear_check_in(team_id)
        if team is None:
            raise NotCheckedInError()

        logger.info("Check-in undone for team %s", team.team_id)
        self._release_attendance(team.team_id)
        return team

    def get_status(self, raw_team_id: Any) -> TeamRecord:
        team_id = normalize_team_id(raw_team_id)
        team = self._teams.get_by_id(team_id)
        if team is None:
            raise NotFoundError("Team not found")
        return team

    def _raise_check_in_rejected(self, team_id: str) -> NoReturn:
        # The conditional update did not apply; find out why for the caller.
        existing = self._teams.get_by_id(team_id)
        if existing is None:
            logger.info("Check-in rejected: unknown team %s", team_id)
            raise NotFoundError()
        if not existing.team_name.strip():
            logger.warning("Check-in rejected: team %s has no team name in the roster", team_id)
            raise IncompleteTeamError()
        logger.info("Check-in rejected: team %s already checked in", team_id)
        raise AlreadyCheckedInError(existing.team_id, existing.team_name, existing.check_in_time)

    def _record_attendance(self, team: TeamRecord) -> None:
        entry = RegistrationEntry(
            team_id=team.team_id,
            team_name=team.team_name,
            check_in_time=team.check_in_time,
            status=RegistrationStatus.PRESENT,
        )
        try:
            self._registrations.upsert(entry)
        except Exception:
            logger.exception("Attendance log write failed for team %s; check-in kept", team.team_id)

    def _release_attendance(self, team_id: str) -> None:
        try:
            if self._undo_policy is UndoPolicy.DELETE:
                self._registrations.delete(team_id)
            else:
                self._registrations.mark_absent(team_id)
        except Exception:
            logger.exception("Attendance log update failed for team %s; undo kept", team_id)


def public_team_view(team: TeamRecord) -> dict:
    return {
        "teamId": team.team_id,
        "teamName": team.team_name,
        "college": team.college,
        "members": list(team.members),
        "checkInTime": to_iso(team.check_in_time),
    }


def status_view(team: TeamRecord) -> dict:
    return {
        "isCheckedIn": team.is_checked_in,
        "checkInTime": to_iso(team.check_in_time),
        "teamName": team.team_name,
    }
