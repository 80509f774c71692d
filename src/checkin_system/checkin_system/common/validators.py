from __future__ import annotations

from typing import Any

from ..core.exceptions import InvalidInputError


def normalize_team_id(value: Any) -> str:
    """Canonical team id: trimmed and upper-cased.

    JSON clients sometimes send numeric ids; integers are taken as their text.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidInputError()
    if not isinstance(value, str):
        raise InvalidInputError("Invalid Team ID")
    return value.strip().upper()


def clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
