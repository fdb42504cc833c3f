from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from field_attendance.assignments.model import Assignment
from field_attendance.assignments.service import AssignmentRegistry
from field_attendance.attendance.model import AttendanceSession, HistoryEntry
from field_attendance.attendance.service import AttendanceService
from field_attendance.clients.model import Client
from field_attendance.core.enums import Role, SessionStatus
from field_attendance.reports.model import TeamCheckinRow, TeamSessionRow, WeeklyStats
from field_attendance.reports.service import ReportService
from field_attendance.users.model import Employee


class InMemoryStore:
    """Shared rows behind the in-memory repositories."""

    def __init__(self):
        self.users: dict[int, Employee] = {}
        self.clients: dict[int, Client] = {}
        self.assignments: list[Assignment] = []
        self.sessions: dict[int, AttendanceSession] = {}
        self._next_session_id = 0

    def add_user(self, employee_id, name, *, role=Role.EMPLOYEE, manager_id=None):
        self.users[employee_id] = Employee(
            employee_id=employee_id,
            name=name,
            email=f"{name.split()[0].lower()}@example.com",
            role=role,
            manager_id=manager_id,
        )

    def add_client(self, client_id, name, latitude, longitude, address=None):
        self.clients[client_id] = Client(client_id, name, address, latitude, longitude)

    def assign(self, employee_id, client_id, assigned_date=date(2024, 1, 1)):
        self.assignments.append(Assignment(employee_id, client_id, assigned_date))

    def add_session(self, employee_id, client_id, check_in_time, check_out_time=None, *, notes=None):
        self._next_session_id += 1
        status = SessionStatus.CHECKED_IN if check_out_time is None else SessionStatus.CHECKED_OUT
        client = self.clients[client_id]
        s = AttendanceSession(
            session_id=self._next_session_id,
            employee_id=employee_id,
            client_id=client_id,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            latitude=client.latitude,
            longitude=client.longitude,
            distance_from_client=0.0,
            status=status,
            notes=notes,
        )
        self.sessions[s.session_id] = s
        return s

    def open_sessions(self, employee_id):
        return [s for s in self.sessions.values() if s.employee_id == employee_id and s.is_open]


class InMemoryClients:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def get_by_id(self, client_id: int) -> Optional[Client]:
        return self._store.clients.get(client_id)

    def list_assigned_to(self, employee_id: int):
        ids = [a.client_id for a in self._store.assignments if a.employee_id == employee_id]
        return [self._store.clients[i] for i in ids if i in self._store.clients]


class InMemoryAssignments:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def exists(self, *, employee_id: int, client_id: int) -> bool:
        return any(a.employee_id == employee_id and a.client_id == client_id for a in self._store.assignments)


class InMemoryUsers:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def list_team(self, manager_id: int):
        team = [u for u in self._store.users.values() if u.manager_id == manager_id]
        return sorted(team, key=lambda u: (u.name.casefold(), u.employee_id))


class InMemoryAttendance:
    """Honours the same store-side rule as the MySQL unique key."""

    def __init__(self, store: InMemoryStore):
        self._store = store

    def get_active_for_employee(self, employee_id: int) -> Optional[AttendanceSession]:
        found = self._store.open_sessions(employee_id)
        return found[0] if found else None

    def get_active_entry(self, employee_id: int) -> Optional[HistoryEntry]:
        session = self.get_active_for_employee(employee_id)
        return self._entry(session) if session is not None else None

    def create_session(self, *, employee_id, client_id, check_in_time, latitude, longitude,
                       distance_from_client, notes=None):
        if self._store.open_sessions(employee_id):
            return None
        s = self._store.add_session(employee_id, client_id, check_in_time, notes=notes)
        s = replace(s, latitude=latitude, longitude=longitude, distance_from_client=distance_from_client)
        self._store.sessions[s.session_id] = s
        return s

    def close_active_session(self, *, employee_id, check_out_time):
        found = self._store.open_sessions(employee_id)
        if not found:
            return None
        s = found[0]
        closed = replace(
            s,
            check_out_time=max(check_out_time, s.check_in_time),
            status=SessionStatus.CHECKED_OUT,
        )
        self._store.sessions[s.session_id] = closed
        return closed

    def get_history(self, employee_id, *, start_date=None, end_date=None):
        items = [s for s in self._store.sessions.values() if s.employee_id == employee_id]
        if start_date is not None:
            items = [s for s in items if s.check_in_time.date() >= start_date]
        if end_date is not None:
            items = [s for s in items if s.check_in_time.date() <= end_date]
        items.sort(key=lambda s: (s.check_in_time, s.session_id), reverse=True)
        return [self._entry(s) for s in items]

    def _entry(self, s: AttendanceSession) -> HistoryEntry:
        client = self._store.clients[s.client_id]
        return HistoryEntry(session=s, client_name=client.name, client_address=client.address)


class InMemoryReports:
    def __init__(self, store: InMemoryStore):
        self._store = store
        self.last_args = None

    def get_team_sessions(self, *, manager_id, work_date, employee_id=None):
        self.last_args = {"manager_id": manager_id, "work_date": work_date, "employee_id": employee_id}
        rows = []
        team = InMemoryUsers(self._store).list_team(manager_id)
        for u in team:
            if employee_id is not None and u.employee_id != employee_id:
                continue
            sessions = [
                s for s in self._store.sessions.values()
                if s.employee_id == u.employee_id and s.check_in_time.date() == work_date
            ]
            if not sessions:
                rows.append(TeamSessionRow(employee_id=u.employee_id, employee_name=u.name))
            for s in sorted(sessions, key=lambda s: s.check_in_time):
                rows.append(
                    TeamSessionRow(
                        employee_id=u.employee_id,
                        employee_name=u.name,
                        session_id=s.session_id,
                        client_id=s.client_id,
                        check_in_time=s.check_in_time,
                        check_out_time=s.check_out_time,
                    )
                )
        return rows

    def get_team_checkins(self, *, manager_id, work_date):
        rows = []
        for s in self._store.sessions.values():
            u = self._store.users[s.employee_id]
            if u.manager_id != manager_id or s.check_in_time.date() != work_date:
                continue
            rows.append(
                TeamCheckinRow(
                    session_id=s.session_id,
                    employee_id=u.employee_id,
                    employee_name=u.name,
                    client_id=s.client_id,
                    client_name=self._store.clients[s.client_id].name,
                    check_in_time=s.check_in_time,
                    check_out_time=s.check_out_time,
                    status=s.status.value,
                )
            )
        rows.sort(key=lambda r: r.check_in_time, reverse=True)
        return rows

    def count_open_team_sessions(self, manager_id):
        return sum(
            1 for s in self._store.sessions.values()
            if s.is_open and self._store.users[s.employee_id].manager_id == manager_id
        )

    def get_checkin_stats_since(self, *, employee_id, since: datetime):
        recent = [
            s for s in self._store.sessions.values()
            if s.employee_id == employee_id and s.check_in_time >= since
        ]
        return WeeklyStats(total_checkins=len(recent), unique_clients=len({s.client_id for s in recent}))


MANAGER_ID = 1
RAHUL, PRIYA, VIKRAM = 2, 3, 4
ABC_CORP, XYZ_LTD, TECH_SOLUTIONS, GLOBAL_SERVICES, INNOVATE = 1, 2, 3, 4, 5


@pytest.fixture
def store() -> InMemoryStore:
    s = InMemoryStore()
    s.add_user(MANAGER_ID, "Amit Sharma", role=Role.MANAGER)
    s.add_user(RAHUL, "Rahul Kumar", manager_id=MANAGER_ID)
    s.add_user(PRIYA, "Priya Singh", manager_id=MANAGER_ID)
    s.add_user(VIKRAM, "Vikram Patel", manager_id=MANAGER_ID)

    s.add_client(ABC_CORP, "ABC Corp", 28.4946, 77.0887, "Cyber City, Gurugram")
    s.add_client(XYZ_LTD, "XYZ Ltd", 28.4595, 77.0266, "Sector 44, Gurugram")
    s.add_client(TECH_SOLUTIONS, "Tech Solutions", 28.4947, 77.0952, "DLF Phase 3, Gurugram")
    s.add_client(GLOBAL_SERVICES, "Global Services", 28.5011, 77.0838, "Udyog Vihar, Gurugram")
    s.add_client(INNOVATE, "Innovate Inc", 28.5707, 77.3219, "Sector 18, Noida")

    s.assign(RAHUL, ABC_CORP)
    s.assign(RAHUL, XYZ_LTD)
    s.assign(RAHUL, TECH_SOLUTIONS)
    s.assign(PRIYA, XYZ_LTD)
    s.assign(PRIYA, GLOBAL_SERVICES)
    s.assign(VIKRAM, ABC_CORP)
    s.assign(VIKRAM, INNOVATE)
    return s


@pytest.fixture
def attendance_service(store) -> AttendanceService:
    return AttendanceService(
        InMemoryAttendance(store),
        InMemoryClients(store),
        AssignmentRegistry(InMemoryAssignments(store)),
    )


@pytest.fixture
def report_service(store) -> ReportService:
    return ReportService(
        InMemoryReports(store),
        InMemoryAttendance(store),
        InMemoryClients(store),
        InMemoryUsers(store),
    )
