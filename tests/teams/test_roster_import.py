from __future__ import annotations

from datetime import datetime

import pytest

from src.checkin_system.checkin_system.core.enums import RegistrationStatus
from src.checkin_system.checkin_system.registrations.model import RegistrationEntry
from src.checkin_system.checkin_system.teams.importer import RosterImportService, normalize_header


def test_normalize_header():
    assert normalize_header("Team ID") == "teamid"
    assert normalize_header("member_1") == "member1"
    assert normalize_header("E-mail") == "email"


def test_parse_accepts_header_aliases(teams_repo):
    svc = RosterImportService(teams_repo, default_college="Default U")
    records = [
        {
            "TEAM NO": " h10 ",
            "Team Name": " Lambda Llamas ",
            "College Name": "NIE Mysuru",
            "member1 name": "Asha",
            "Member 2": float("nan"),
            "member_3": "  ",
            "Member4": "Rahul ",
            "Contact Number": "9000000001",
            "E-mail": "llamas@example.com",
        },
        {"name": "No Id Team", "Phone": "9000000002"},
    ]

    result = svc.parse_records(records)

    assert result.errors == []
    first, second = result.teams
    assert first.team_id == "H10"
    assert first.team_name == "Lambda Llamas"
    assert first.college == "NIE Mysuru"
    assert first.members == ("Asha", "Rahul")
    assert first.contact_number == "9000000001"
    assert first.email == "llamas@example.com"
    assert first.is_checked_in is False and first.check_in_time is None

    assert second.team_id == "HACK002"
    assert second.college == "Default U"
    assert second.members == ()


def test_parse_reports_missing_names_and_duplicates(teams_repo):
    svc = RosterImportService(teams_repo)

    result = svc.parse_records(
        [
            {"Team ID": "A1", "Team Name": "Alpha"},
            {"Team ID": "A2", "Team Name": ""},
            {"Team ID": "a1", "Team Name": "Alpha again"},
        ]
    )

    assert [t.team_id for t in result.teams] == ["A1"]
    assert [(e.row, e.team_id, e.error) for e in result.errors] == [
        (2, "A2", "Missing Team Name"),
        (3, "A1", "Duplicate Team ID"),
    ]


def test_replace_import_clears_roster_and_log(teams_repo, registrations_repo):
    registrations_repo.upsert(
        RegistrationEntry(team_id="H1", team_name="Null Pointers", check_in_time=datetime(2026, 2, 1, 9, 0))
    )
    svc = RosterImportService(teams_repo)

    result = svc.import_records([{"Team ID": "N1", "Team Name": "New One"}, {"Team ID": "N2", "Team Name": "New Two"}])

    assert result.imported == 2
    assert result.total_in_roster == 2
    assert teams_repo.get_by_id("H1") is None
    assert registrations_repo.list_all() == []


def test_append_import_keeps_existing_and_skips_known_ids(teams_repo, registrations_repo):
    registrations_repo.upsert(
        RegistrationEntry(team_id="H1", team_name="Null Pointers", check_in_time=datetime(2026, 2, 1, 9, 0))
    )
    svc = RosterImportService(teams_repo)

    result = svc.import_records(
        [{"Team ID": "H1", "Team Name": "Clash"}, {"Team ID": "H9", "Team Name": "Nine"}],
        replace=False,
    )

    assert result.imported == 1
    assert result.total_in_roster == 4
    assert [(e.row, e.team_id) for e in result.errors] == [(1, "H1")]
    assert teams_repo.get_by_id("H1").team_name == "Null Pointers"
    assert registrations_repo.get("H1").status == RegistrationStatus.PRESENT


def test_parse_rejects_values_wider_than_the_schema(teams_repo):
    svc = RosterImportService(teams_repo)

    result = svc.parse_records(
        [
            {"Team ID": "X" * 33, "Team Name": "Too Long Id"},
            {"Team ID": "L1", "Team Name": "n" * 256},
            {"Team ID": "X" * 32, "Team Name": "n" * 255},
        ]
    )

    assert [t.team_id for t in result.teams] == ["X" * 32]
    assert [(e.row, e.error) for e in result.errors] == [
        (1, "Team ID longer than 32 characters"),
        (2, "Team Name longer than 255 characters"),
    ]


def test_failed_replace_import_leaves_roster_and_log_untouched(teams_repo, registrations_repo, monkeypatch):
    registrations_repo.upsert(
        RegistrationEntry(team_id="H1", team_name="Null Pointers", check_in_time=datetime(2026, 2, 1, 9, 0))
    )

    def store_rejects(teams):
        raise RuntimeError("Data too long for column 'team_name'")

    monkeypatch.setattr(teams_repo, "replace_all", store_rejects)
    svc = RosterImportService(teams_repo)

    with pytest.raises(RuntimeError):
        svc.import_records([{"Team ID": "N1", "Team Name": "New One"}])

    assert teams_repo.get_counts().total == 3
    assert registrations_repo.get("H1") is not None
