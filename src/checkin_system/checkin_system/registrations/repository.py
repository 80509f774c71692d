from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import RegistrationStatus
from .model import RegistrationEntry


class RegistrationRepository(Protocol):
    def get(self, team_id: str) -> Optional[RegistrationEntry]:
        raise NotImplementedError

    def list_all(self, *, status: Optional[RegistrationStatus] = None) -> Sequence[RegistrationEntry]:
        """Entries ordered by check-in time, oldest first."""

        raise NotImplementedError

    def upsert(self, entry: RegistrationEntry) -> None:
        raise NotImplementedError

    def mark_absent(self, team_id: str) -> bool:
        raise NotImplementedError

    def delete(self, team_id: str) -> bool:
        raise NotImplementedError
