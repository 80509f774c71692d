from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest

from src.checkin_system.checkin_system.core.enums import RegistrationStatus
from src.checkin_system.checkin_system.registrations.model import RegistrationEntry
from src.checkin_system.checkin_system.teams.model import TeamCounts, TeamRecord


class InMemoryTeams:
    """Roster fake; the lock plays the role of the store's atomic conditional update."""

    def __init__(self, teams=()):
        self._lock = threading.Lock()
        self._teams: dict[str, TeamRecord] = {t.team_id: t for t in teams}
        # Attendance Logs that reference this roster; replace_all clears them.
        self.dependent_logs: list[InMemoryRegistrations] = []

    def get_by_id(self, team_id: str) -> Optional[TeamRecord]:
        return self._teams.get(team_id)

    def list_all(self, *, limit=None):
        items = list(self._teams.values())
        return items if limit is None else items[:limit]

    def get_counts(self) -> TeamCounts:
        with self._lock:
            items = list(self._teams.values())
        return TeamCounts(total=len(items), checked_in=sum(1 for t in items if t.is_checked_in))

    def mark_checked_in(self, team_id: str, *, at: datetime) -> Optional[TeamRecord]:
        with self._lock:
            team = self._teams.get(team_id)
            if team is None or team.is_checked_in or not team.team_name.strip():
                return None
            team = replace(team, is_checked_in=True, check_in_time=at)
            self._teams[team_id] = team
            return team

    def clear_check_in(self, team_id: str) -> Optional[TeamRecord]:
        with self._lock:
            team = self._teams.get(team_id)
            if team is None or not team.is_checked_in:
                return None
            team = replace(team, is_checked_in=False, check_in_time=None)
            self._teams[team_id] = team
            return team

    def insert_many(self, teams) -> int:
        n = 0
        for t in teams:
            self._teams[t.team_id] = t
            n += 1
        return n

    def replace_all(self, teams) -> int:
        fresh = {t.team_id: t for t in teams}
        with self._lock:
            for log in self.dependent_logs:
                log.clear()
            self._teams = fresh
        return len(fresh)


class InMemoryRegistrations:
    def __init__(self, entries=()):
        self._entries: dict[str, RegistrationEntry] = {e.team_id: e for e in entries}

    def get(self, team_id: str) -> Optional[RegistrationEntry]:
        return self._entries.get(team_id)

    def list_all(self, *, status=None):
        items = [e for e in self._entries.values() if status is None or e.status == status]
        items.sort(key=lambda e: (e.check_in_time, e.team_id))
        return items

    def upsert(self, entry: RegistrationEntry) -> None:
        self._entries[entry.team_id] = entry

    def mark_absent(self, team_id: str) -> bool:
        entry = self._entries.get(team_id)
        if not entry:
            return False
        self._entries[team_id] = replace(entry, status=RegistrationStatus.ABSENT)
        return True

    def delete(self, team_id: str) -> bool:
        return self._entries.pop(team_id, None) is not None

    def clear(self) -> None:
        self._entries.clear()


def make_team(team_id: str, name: str, **kwargs) -> TeamRecord:
    kwargs.setdefault("college", "Malnad College of Engineering")
    kwargs.setdefault("members", ("A", "B"))
    return TeamRecord(team_id=team_id, team_name=name, **kwargs)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 9, 30, 0)


@pytest.fixture
def teams_repo() -> InMemoryTeams:
    return InMemoryTeams(
        [
            make_team("H1", "Null Pointers"),
            make_team("H2", "Byte Me"),
            make_team("H3", "Stack Smashers", members=("Meera", "Vikram", "Sneha", "Rohan")),
        ]
    )


@pytest.fixture
def registrations_repo(teams_repo) -> InMemoryRegistrations:
    log = InMemoryRegistrations()
    teams_repo.dependent_logs.append(log)
    return log
