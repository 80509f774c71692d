from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

import pandas as pd

from ..core.constants import (
    DEFAULT_COLLEGE,
    GENERATED_TEAM_ID_PREFIX,
    MAX_TEAM_ID_LENGTH,
    MAX_TEAM_MEMBERS,
    MAX_TEAM_NAME_LENGTH,
)
from .model import TeamRecord
from .repository import TeamRepository

logger = logging.getLogger(__name__)

TEAM_ID_HEADERS = ("Team ID", "TeamID", "team_id", "id", "Team No")
TEAM_NAME_HEADERS = ("Team Name", "TeamName", "team_name", "name")
COLLEGE_HEADERS = ("College", "Institution", "College Name")
CONTACT_HEADERS = ("Contact", "Phone", "Mobile", "Contact Number")
EMAIL_HEADERS = ("Email", "E-mail")


def _member_headers(n: int) -> tuple[str, ...]:
    return (f"member{n} name", f"Member {n}", f"member_{n}", f"member{n}")


def normalize_header(key: Any) -> str:
    return re.sub(r"[^a-z0-9]", "", str(key).lower())


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    try:
        if pd.isna(value):
            return True
    except (TypeError, ValueError):
        pass
    return str(value).strip() == ""


@dataclass(frozen=True)
class ImportRowError:
    row: int
    error: str
    team_id: Optional[str] = None


@dataclass
class ImportResult:
    teams: list[TeamRecord] = field(default_factory=list)
    errors: list[ImportRowError] = field(default_factory=list)
    row_numbers: dict[str, int] = field(default_factory=dict)
    imported: int = 0
    total_in_roster: int = 0


class RosterImportService:
    """Bulk roster seeding from a spreadsheet (first sheet)."""

    def __init__(
        self,
        teams: TeamRepository,
        *,
        default_college: str = DEFAULT_COLLEGE,
    ):
        self._teams = teams
        self._default_college = default_college

    def parse_records(self, records: Iterable[Mapping[str, Any]]) -> ImportResult:
        result = ImportResult()
        seen: set[str] = set()

        for index, raw in enumerate(records):
            row_no = index + 1
            row = {normalize_header(k): v for k, v in raw.items()}

            def get(*aliases: str) -> str:
                for alias in aliases:
                    value = row.get(normalize_header(alias))
                    if not _is_blank(value):
                        return str(value).strip()
                return ""

            team_id = (get(*TEAM_ID_HEADERS) or f"{GENERATED_TEAM_ID_PREFIX}{row_no:03d}").upper()
            team_name = get(*TEAM_NAME_HEADERS)

            if not team_name:
                result.errors.append(ImportRowError(row=row_no, team_id=team_id, error="Missing Team Name"))
                continue
            if len(team_id) > MAX_TEAM_ID_LENGTH:
                result.errors.append(ImportRowError(
                    row=row_no, team_id=team_id, error=f"Team ID longer than {MAX_TEAM_ID_LENGTH} characters"))
                continue
            if len(team_name) > MAX_TEAM_NAME_LENGTH:
                result.errors.append(ImportRowError(
                    row=row_no, team_id=team_id, error=f"Team Name longer than {MAX_TEAM_NAME_LENGTH} characters"))
                continue
            if team_id in seen:
                result.errors.append(ImportRowError(row=row_no, team_id=team_id, error="Duplicate Team ID"))
                continue
            seen.add(team_id)
            result.row_numbers[team_id] = row_no

            members = tuple(
                m for m in (get(*_member_headers(n)) for n in range(1, MAX_TEAM_MEMBERS + 1)) if m
            )
            result.teams.append(
                TeamRecord(
                    team_id=team_id,
                    team_name=team_name,
                    college=get(*COLLEGE_HEADERS) or self._default_college,
                    members=members,
                    contact_number=get(*CONTACT_HEADERS),
                    email=get(*EMAIL_HEADERS),
                )
            )

        return result

    def import_records(self, records: Iterable[Mapping[str, Any]], *, replace: bool = True) -> ImportResult:
        result = self.parse_records(records)

        if replace:
            result.imported = self._teams.replace_all(result.teams)
        else:
            fresh = []
            for team in result.teams:
                if self._teams.get_by_id(team.team_id) is None:
                    fresh.append(team)
                else:
                    result.errors.append(ImportRowError(
                        row=result.row_numbers[team.team_id], team_id=team.team_id, error="Team ID already in roster"))
            result.teams = fresh
            result.imported = self._teams.insert_many(result.teams)

        result.total_in_roster = self._teams.get_counts().total
        logger.info("Imported %d teams (%d rows rejected)", result.imported, len(result.errors))
        return result

    def import_file(self, path: str | Path, *, replace: bool = True) -> ImportResult:
        df = pd.read_excel(Path(path), sheet_name=0, dtype=str)
        return self.import_records(df.to_dict("records"), replace=replace)
