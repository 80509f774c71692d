from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import RegistrationStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import RegistrationEntry
from .repository import RegistrationRepository


def _to_entry(r: dict) -> RegistrationEntry:
    return RegistrationEntry(
        team_id=r["team_id"],
        team_name=r["team_name"],
        check_in_time=r["check_in_time"],
        status=RegistrationStatus(r["status"]),
    )


class MySQLRegistrationRepository(RegistrationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, team_id: str) -> Optional[RegistrationEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT team_id, team_name, check_in_time, status
                FROM registrations_done
                WHERE team_id=%s
                """,
                (team_id,),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def list_all(self, *, status: Optional[RegistrationStatus] = None) -> Sequence[RegistrationEntry]:
        where = ""
        params: tuple = ()
        if status is not None:
            where = "WHERE status=%s"
            params = (status.value,)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT team_id, team_name, check_in_time, status
                FROM registrations_done
                {where}
                ORDER BY check_in_time ASC, team_id ASC
                """,
                params,
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def upsert(self, entry: RegistrationEntry) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO registrations_done(team_id, team_name, check_in_time, status)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    team_name=VALUES(team_name),
                    check_in_time=VALUES(check_in_time),
                    status=VALUES(status)
                """,
                (entry.team_id, entry.team_name, entry.check_in_time, entry.status.value),
            )

    def mark_absent(self, team_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE registrations_done SET status=%s WHERE team_id=%s",
                (RegistrationStatus.ABSENT.value, team_id),
            )
            return cur.rowcount > 0

    def delete(self, team_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM registrations_done WHERE team_id=%s", (team_id,))
            return cur.rowcount > 0
