from __future__ import annotations

from datetime import datetime
from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400
    default_message = "Request could not be processed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)

    def payload(self) -> dict:
        return {}


class InvalidInputError(DomainError):
    """Raised when the team id is missing, blank or not text."""

    default_message = "Team ID is required"


class NotFoundError(DomainError):
    """Raised when the team id is not in the roster."""

    status_code = 404
    default_message = "Team ID not found. Please verify your Team ID."


class IncompleteTeamError(DomainError):
    """Raised when the roster row for the team has no team name."""

    default_message = "Team data is incomplete. Please contact admin."


class AlreadyCheckedInError(DomainError):
    """Raised when the conditional check-in found the team already checked in."""

    default_message = "This team has already checked in."

    def __init__(self, team_id: str, team_name: str, check_in_time: Optional[datetime]):
        super().__init__()
        self.team_id = team_id
        self.team_name = team_name
        self.check_in_time = check_in_time

    def payload(self) -> dict:
        return {
            "team": {
                "teamId": self.team_id,
                "teamName": self.team_name,
                "checkInTime": self.check_in_time.isoformat() if self.check_in_time else None,
            }
        }


class NotCheckedInError(DomainError):
    """Raised when an undo finds no checked-in team for the id."""

    status_code = 404
    default_message = "Team is not checked in."


class NoDataError(DomainError):
    """Raised when an export has nothing to write."""

    status_code = 404
    default_message = "No checked-in teams to export."


class StoreUnavailableError(DomainError):
    """Raised when the database cannot be reached."""

    status_code = 500
    default_message = "Database connection failed. Please try again."
