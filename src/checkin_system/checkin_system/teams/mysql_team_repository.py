from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_list
from .model import TeamCounts, TeamRecord
from .repository import TeamRepository

_COLUMNS = "team_id, team_name, college, members, contact_number, email, is_checked_in, check_in_time"
_INSERT_SQL = f"INSERT INTO selected_teams({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s)"

logger = logging.getLogger(__name__)


def _to_record(r: dict) -> TeamRecord:
    return TeamRecord(
        team_id=r["team_id"],
        team_name=r["team_name"],
        college=r.get("college") or "",
        members=tuple(load_json_list(r.get("members"))),
        contact_number=r.get("contact_number") or "",
        email=r.get("email") or "",
        is_checked_in=bool(r["is_checked_in"]),
        check_in_time=r.get("check_in_time"),
    )


def _to_rows(teams: Iterable[TeamRecord]) -> list[tuple]:
    return [
        (
            t.team_id,
            t.team_name,
            t.college,
            json.dumps(list(t.members)),
            t.contact_number,
            t.email,
            1 if t.is_checked_in else 0,
            t.check_in_time,
        )
        for t in teams
    ]


class MySQLTeamRepository(TeamRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, team_id: str) -> Optional[TeamRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM selected_teams WHERE team_id=%s", (team_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_all(self, *, limit: Optional[int] = None) -> Sequence[TeamRecord]:
        sql = f"""
            SELECT {_COLUMNS}
            FROM selected_teams
            ORDER BY is_checked_in DESC, check_in_time DESC, team_id ASC
        """
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT %s"
            params = (int(limit),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_record(r) for r in fetchall(cur)]

    def get_counts(self) -> TeamCounts:
        # One statement so both counters come from the same snapshot.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS total, COALESCE(SUM(is_checked_in), 0) AS checked_in
                FROM selected_teams
                """
            )
            r = fetchone(cur) or {}
            return TeamCounts(total=int(r.get("total") or 0), checked_in=int(r.get("checked_in") or 0))

    def mark_checked_in(self, team_id: str, *, at: datetime) -> Optional[TeamRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE selected_teams
                SET is_checked_in=1, check_in_time=%s
                WHERE team_id=%s AND is_checked_in=0 AND TRIM(team_name) <> ''
                """,
                (at, team_id),
            )
            if cur.rowcount != 1:
                return None
            # Row stays locked until commit, so this read sees our own write.
            cur.execute(f"SELECT {_COLUMNS} FROM selected_teams WHERE team_id=%s", (team_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def clear_check_in(self, team_id: str) -> Optional[TeamRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE selected_teams
                SET is_checked_in=0, check_in_time=NULL
                WHERE team_id=%s AND is_checked_in=1
                """,
                (team_id,),
            )
            if cur.rowcount != 1:
                return None
            cur.execute(f"SELECT {_COLUMNS} FROM selected_teams WHERE team_id=%s", (team_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def insert_many(self, teams: Iterable[TeamRecord]) -> int:
        rows = _to_rows(teams)
        if not rows:
            return 0

        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(_INSERT_SQL, rows)
            return len(rows)

    def replace_all(self, teams: Iterable[TeamRecord]) -> int:
        rows = _to_rows(teams)
        with db_cursor(self._conn_factory) as (_, cur):
            # Log rows reference roster rows, so they go first.
            cur.execute("DELETE FROM registrations_done")
            cleared_log = int(cur.rowcount)
            cur.execute("DELETE FROM selected_teams")
            cleared = int(cur.rowcount)
            if rows:
                cur.executemany(_INSERT_SQL, rows)
        logger.info("Replaced %d teams and %d attendance entries with %d teams", cleared, cleared_log, len(rows))
        return len(rows)
