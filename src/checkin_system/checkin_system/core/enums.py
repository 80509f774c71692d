from __future__ import annotations

from enum import Enum


class RegistrationStatus(str, Enum):
    """Status of an Attendance Log row."""

    PRESENT = "present"
    ABSENT = "absent"


class UndoPolicy(str, Enum):
    """What happens to the Attendance Log entry when a check-in is undone."""

    MARK_ABSENT = "mark_absent"
    DELETE = "delete"
