from __future__ import annotations

from dataclasses import dataclass

from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .assignments.service import AssignmentRegistry
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .clients.mysql_client_repository import MySQLClientRepository
from .database.connection import DBConfig, DatabaseConnection
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.service import ReportService
from .users.mysql_user_repository import MySQLUserRepository


@dataclass(frozen=True)
class Container:
    attendance_service: AttendanceService
    report_service: ReportService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    clients_repo = MySQLClientRepository(conn)
    assignments_repo = MySQLAssignmentRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    reports_repo = MySQLReportRepository(conn)

    attendance_service = AttendanceService(
        attendance_repo,
        clients_repo,
        AssignmentRegistry(assignments_repo),
    )
    report_service = ReportService(reports_repo, attendance_repo, clients_repo, users_repo)

    return Container(
        attendance_service=attendance_service,
        report_service=report_service,
    )
