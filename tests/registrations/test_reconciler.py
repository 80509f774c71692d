from __future__ import annotations

from dataclasses import replace
from datetime import timedelta

from src.checkin_system.checkin_system.checkin.service import CheckInService
from src.checkin_system.checkin_system.core.enums import RegistrationStatus
from src.checkin_system.checkin_system.registrations.model import RegistrationEntry
from src.checkin_system.checkin_system.registrations.reconciler import AttendanceLogReconciler


def test_reconcile_projects_roster_onto_log(teams_repo, registrations_repo, fixed_now, monkeypatch):
    svc = CheckInService(teams_repo, registrations_repo)
    svc.check_in("H1", now=fixed_now)
    svc.check_in("H2", now=fixed_now + timedelta(minutes=1))

    # H3: checked in while the log was down.
    def log_down(entry):
        raise RuntimeError("down")

    monkeypatch.setattr(registrations_repo, "upsert", log_down)
    svc.check_in("H3", now=fixed_now + timedelta(minutes=2))
    monkeypatch.undo()

    # H2: stale time; GHOST: present entry with no roster team.
    registrations_repo.upsert(replace(registrations_repo.get("H2"), check_in_time=fixed_now - timedelta(hours=1)))
    registrations_repo.upsert(RegistrationEntry(team_id="GHOST", team_name="Gone", check_in_time=fixed_now))
    roster_before = list(teams_repo.list_all())

    report = AttendanceLogReconciler(teams_repo, registrations_repo).reconcile()

    assert (report.added, report.updated, report.marked_absent, report.unchanged) == (1, 1, 1, 1)
    assert registrations_repo.get("H3").status == RegistrationStatus.PRESENT
    assert registrations_repo.get("H2").check_in_time == fixed_now + timedelta(minutes=1)
    assert registrations_repo.get("GHOST").status == RegistrationStatus.ABSENT
    assert list(teams_repo.list_all()) == roster_before


def test_reconcile_is_idempotent(teams_repo, registrations_repo, fixed_now):
    CheckInService(teams_repo, registrations_repo).check_in("H1", now=fixed_now)
    reconciler = AttendanceLogReconciler(teams_repo, registrations_repo)

    reconciler.reconcile()
    report = reconciler.reconcile()

    assert (report.added, report.updated, report.marked_absent, report.unchanged) == (0, 0, 0, 1)
