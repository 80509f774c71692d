from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from .model import TeamCounts, TeamRecord


class TeamRepository(Protocol):
    def get_by_id(self, team_id: str) -> Optional[TeamRecord]:
        raise NotImplementedError

    def list_all(self, *, limit: Optional[int] = None) -> Sequence[TeamRecord]:
        raise NotImplementedError

    def get_counts(self) -> TeamCounts:
        raise NotImplementedError

    def mark_checked_in(self, team_id: str, *, at: datetime) -> Optional[TeamRecord]:
        """Atomically flip a pending team to checked-in.

        Returns the updated record, or None when the id does not match a
        pending team that has a name.
        """

        raise NotImplementedError

    def clear_check_in(self, team_id: str) -> Optional[TeamRecord]:
        """Atomically flip a checked-in team back to pending; None if not checked in."""

        raise NotImplementedError

    def insert_many(self, teams: Iterable[TeamRecord]) -> int:
        raise NotImplementedError

    def replace_all(self, teams: Iterable[TeamRecord]) -> int:
        """Swap the whole roster for ``teams`` in one transaction.

        Attendance Log rows reference roster rows, so they are cleared too. On
        failure nothing changes. Returns the number of teams inserted.
        """

        raise NotImplementedError
