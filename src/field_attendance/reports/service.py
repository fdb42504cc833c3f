from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Optional

from ..attendance.repository import AttendanceRepository
from ..clients.repository import ClientRepository
from ..common.datetime_utils import hours_between, now_local
from ..common.numbers import round_half_up
from ..common.validators import require_int, require_iso_date
from ..core.constants import WEEKLY_STATS_DAYS
from ..users.repository import UserRepository
from .model import (
    DailySummary,
    EmployeeDashboard,
    EmployeeDaySummary,
    ManagerDashboard,
    TeamSummary,
    WeeklyStats,
)
from .repository import ReportRepository


class ReportService:
    """Aggregates recorded sessions into manager and employee reports."""

    def __init__(
        self,
        reports: ReportRepository,
        attendance: AttendanceRepository,
        clients: ClientRepository,
        users: UserRepository,
    ):
        self._reports = reports
        self._attendance = attendance
        self._clients = clients
        self._users = users

    def daily_summary(self, manager_id: int, day: Any, employee_id: Any = None) -> DailySummary:
        """Per-employee check-ins, distinct clients and hours for one date.

        Hours only count sessions that have been checked out. The team's
        client total sums each employee's distinct count, so a client visited
        by two employees counts twice.
        """
        work_date = require_iso_date(day, "date")
        employee_filter = None if employee_id in (None, "") else require_int(employee_id, "employee_id")

        rows = self._reports.get_team_sessions(
            manager_id=int(manager_id), work_date=work_date, employee_id=employee_filter
        )

        per_employee: dict[int, dict] = {}
        for r in rows:
            acc = per_employee.get(r.employee_id)
            if acc is None:
                acc = {"name": r.employee_name, "checkins": 0, "clients": set(), "hours": 0.0}
                per_employee[r.employee_id] = acc
            if r.session_id is None:
                continue
            acc["checkins"] += 1
            acc["clients"].add(r.client_id)
            if r.check_out_time is not None and r.check_in_time is not None:
                acc["hours"] += hours_between(r.check_in_time, r.check_out_time)

        employees = [
            EmployeeDaySummary(
                employee_id=emp_id,
                employee_name=acc["name"],
                total_checkins=acc["checkins"],
                clients_visited=len(acc["clients"]),
                working_hours=round_half_up(acc["hours"], 2),
            )
            for emp_id, acc in per_employee.items()
        ]
        employees.sort(key=lambda e: (e.employee_name.casefold(), e.employee_id))

        team = TeamSummary(
            total_checkins=sum(e.total_checkins for e in employees),
            total_working_hours=round_half_up(sum(e.working_hours for e in employees), 2),
            total_clients_visited=sum(e.clients_visited for e in employees),
        )
        return DailySummary(date=work_date, team_summary=team, employees=employees)

    def employee_weekly_stats(self, employee_id: int, *, now: Optional[datetime] = None) -> WeeklyStats:
        now = now or now_local()
        since = now - timedelta(days=WEEKLY_STATS_DAYS)
        return self._reports.get_checkin_stats_since(employee_id=int(employee_id), since=since)

    def manager_dashboard(self, manager_id: int, *, today: Optional[date] = None) -> ManagerDashboard:
        today = today or now_local().date()
        team = list(self._users.list_team(int(manager_id)))
        return ManagerDashboard(
            team_size=len(team),
            team_members=team,
            today_checkins=list(self._reports.get_team_checkins(manager_id=int(manager_id), work_date=today)),
            active_checkins=self._reports.count_open_team_sessions(int(manager_id)),
        )

    def employee_dashboard(self, employee_id: int, *, now: Optional[datetime] = None) -> EmployeeDashboard:
        now = now or now_local()
        today = now.date()
        return EmployeeDashboard(
            today_checkins=list(self._attendance.get_history(int(employee_id), start_date=today, end_date=today)),
            assigned_clients=list(self._clients.list_assigned_to(int(employee_id))),
            week_stats=self.employee_weekly_stats(employee_id, now=now),
        )
