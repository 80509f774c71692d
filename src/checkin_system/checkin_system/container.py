from __future__ import annotations

from dataclasses import dataclass

from .admin.export import AttendanceExportService
from .admin.service import DashboardService
from .checkin.service import CheckInService
from .core.constants import DEFAULT_COLLEGE, DEFAULT_POOL_SIZE, DEFAULT_POOL_TIMEOUT
from .core.enums import UndoPolicy
from .database.connection import DBConfig, DatabaseConnection
from .registrations.mysql_registration_repository import MySQLRegistrationRepository
from .registrations.reconciler import AttendanceLogReconciler
from .registrations.repository import RegistrationRepository
from .teams.importer import RosterImportService
from .teams.mysql_team_repository import MySQLTeamRepository
from .teams.repository import TeamRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    teams_repo: TeamRepository
    registrations_repo: RegistrationRepository

    checkin_service: CheckInService
    dashboard_service: DashboardService
    export_service: AttendanceExportService
    roster_import_service: RosterImportService
    reconciler: AttendanceLogReconciler


def build_services(
    conn,
    teams_repo: TeamRepository,
    registrations_repo: RegistrationRepository,
    *,
    undo_policy: UndoPolicy | str = UndoPolicy.MARK_ABSENT,
    default_college: str = DEFAULT_COLLEGE,
) -> Container:
    return Container(
        conn=conn,
        teams_repo=teams_repo,
        registrations_repo=registrations_repo,
        checkin_service=CheckInService(teams_repo, registrations_repo, undo_policy=UndoPolicy(undo_policy)),
        dashboard_service=DashboardService(teams_repo),
        export_service=AttendanceExportService(registrations_repo),
        roster_import_service=RosterImportService(teams_repo, default_college=default_college),
        reconciler=AttendanceLogReconciler(teams_repo, registrations_repo),
    )


def build_container(
    *,
    db_config: dict,
    pool_size: int = DEFAULT_POOL_SIZE,
    pool_timeout: float = DEFAULT_POOL_TIMEOUT,
    undo_policy: UndoPolicy | str = UndoPolicy.MARK_ABSENT,
    default_college: str = DEFAULT_COLLEGE,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection(config, pool_size=pool_size, pool_timeout=pool_timeout).open()

    return build_services(
        conn,
        MySQLTeamRepository(conn),
        MySQLRegistrationRepository(conn),
        undo_policy=undo_policy,
        default_college=default_college,
    )
