from __future__ import annotations

from datetime import datetime

import pytest
from mysql.connector import errors as mysql_errors

from src.checkin_system.checkin_system.core.exceptions import StoreUnavailableError
from src.checkin_system.checkin_system.teams.model import TeamRecord
from src.checkin_system.checkin_system.teams.mysql_team_repository import MySQLTeamRepository


class FakeCursor:
    def __init__(self, *, rowcount=1, row=None, fail_with=None, fail_many_with=None):
        self.executed: list[tuple[str, tuple]] = []
        self.rowcount = rowcount
        self._row = row
        self._fail_with = fail_with
        self._fail_many_with = fail_many_with

    def execute(self, sql, params=()):
        if self._fail_with is not None:
            raise self._fail_with
        self.executed.append((" ".join(sql.split()), tuple(params)))

    def executemany(self, sql, seq_params):
        if self._fail_many_with is not None:
            raise self._fail_many_with
        self.executed.append((" ".join(sql.split()), tuple(seq_params)))

    def fetchone(self):
        return self._row

    def fetchall(self):
        return [self._row] if self._row else []

    def close(self):
        pass


class FakeConn:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn):
        self.conn = conn

    def connect(self):
        return self.conn


ROW = {
    "team_id": "H1",
    "team_name": "Null Pointers",
    "college": "Malnad College of Engineering",
    "members": '["Asha", "Rahul"]',
    "contact_number": "9000000001",
    "email": "np@example.com",
    "is_checked_in": 1,
    "check_in_time": datetime(2026, 2, 1, 9, 30),
}


def test_mark_checked_in_is_one_conditional_update():
    cur = FakeCursor(rowcount=1, row=ROW)
    conn = FakeConn(cur)
    repo = MySQLTeamRepository(FakeFactory(conn))
    at = datetime(2026, 2, 1, 9, 30)

    team = repo.mark_checked_in("H1", at=at)

    first_sql, first_params = cur.executed[0]
    assert first_sql.startswith("UPDATE selected_teams")
    assert "WHERE team_id=%s AND is_checked_in=0" in first_sql
    assert first_params == (at, "H1")
    assert team.members == ("Asha", "Rahul")
    assert team.is_checked_in is True
    assert conn.committed and conn.closed


def test_mark_checked_in_returns_none_when_no_row_matched():
    cur = FakeCursor(rowcount=0)
    repo = MySQLTeamRepository(FakeFactory(FakeConn(cur)))

    assert repo.mark_checked_in("H1", at=datetime(2026, 2, 1, 9, 30)) is None
    assert len(cur.executed) == 1


def test_clear_check_in_requires_checked_in_row():
    cur = FakeCursor(rowcount=0)
    repo = MySQLTeamRepository(FakeFactory(FakeConn(cur)))

    assert repo.clear_check_in("H1") is None
    assert "WHERE team_id=%s AND is_checked_in=1" in cur.executed[0][0]


def test_connection_errors_surface_as_store_unavailable():
    cur = FakeCursor(fail_with=mysql_errors.InterfaceError("Lost connection"))
    conn = FakeConn(cur)
    repo = MySQLTeamRepository(FakeFactory(conn))

    with pytest.raises(StoreUnavailableError):
        repo.get_counts()

    assert conn.rolled_back and conn.closed


def test_replace_all_clears_log_and_roster_then_inserts_in_one_transaction():
    cur = FakeCursor(rowcount=3)
    conn = FakeConn(cur)
    repo = MySQLTeamRepository(FakeFactory(conn))

    n = repo.replace_all([TeamRecord(team_id="N1", team_name="New One", members=("Asha",))])

    assert n == 1
    assert cur.executed[0][0] == "DELETE FROM registrations_done"
    assert cur.executed[1][0] == "DELETE FROM selected_teams"
    assert cur.executed[2][0].startswith("INSERT INTO selected_teams(")
    (row,) = cur.executed[2][1]
    assert row[:4] == ("N1", "New One", "", '["Asha"]')
    assert conn.committed and conn.closed


def test_replace_all_rolls_back_when_insert_fails():
    cur = FakeCursor(rowcount=3, fail_many_with=mysql_errors.DataError("Data too long for column 'team_id'"))
    conn = FakeConn(cur)
    repo = MySQLTeamRepository(FakeFactory(conn))

    with pytest.raises(mysql_errors.DataError):
        repo.replace_all([TeamRecord(team_id="N1", team_name="New One")])

    assert len(cur.executed) == 2
    assert conn.rolled_back and not conn.committed
    assert conn.closed
