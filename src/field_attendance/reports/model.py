from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..attendance.model import HistoryEntry
from ..clients.model import Client
from ..users.model import Employee


@dataclass(frozen=True)
class TeamSessionRow:
    """Read-model: one employee LEFT JOIN one of their sessions on a day.

    Session fields are None for employees without a session that day.
    """

    employee_id: int
    employee_name: str
    session_id: Optional[int] = None
    client_id: Optional[int] = None
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None


@dataclass(frozen=True)
class TeamCheckinRow:
    """Read-model for the manager dashboard feed."""

    session_id: int
    employee_id: int
    employee_name: str
    client_id: int
    client_name: str
    check_in_time: datetime
    check_out_time: Optional[datetime]
    status: str


@dataclass(frozen=True)
class EmployeeDaySummary:
    employee_id: int
    employee_name: str
    total_checkins: int
    clients_visited: int
    working_hours: float


@dataclass(frozen=True)
class TeamSummary:
    total_checkins: int
    total_working_hours: float
    total_clients_visited: int


@dataclass(frozen=True)
class DailySummary:
    date: date
    team_summary: TeamSummary
    employees: list[EmployeeDaySummary]


@dataclass(frozen=True)
class WeeklyStats:
    total_checkins: int
    unique_clients: int


@dataclass(frozen=True)
class ManagerDashboard:
    team_size: int
    team_members: list[Employee]
    today_checkins: list[TeamCheckinRow]
    active_checkins: int


@dataclass(frozen=True)
class EmployeeDashboard:
    today_checkins: list[HistoryEntry]
    assigned_clients: list[Client]
    week_stats: WeeklyStats
