from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import SessionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TeamCheckinRow, TeamSessionRow, WeeklyStats
from .repository import ReportRepository


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_team_sessions(
        self,
        *,
        manager_id: int,
        work_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[TeamSessionRow]:
        clauses = ["u.manager_id=%s"]
        params: list[object] = [work_date, int(manager_id)]

        if employee_id is not None:
            clauses.append("u.id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    u.id AS employee_id, u.name AS employee_name,
                    ch.id AS session_id, ch.client_id, ch.checkin_time, ch.checkout_time
                FROM users u
                LEFT JOIN checkins ch
                    ON ch.employee_id = u.id
                    AND DATE(ch.checkin_time) = %s
                WHERE {where}
                ORDER BY u.name ASC, u.id ASC, ch.checkin_time ASC
                """,
                tuple(params),
            )
            return [
                TeamSessionRow(
                    employee_id=int(r["employee_id"]),
                    employee_name=r["employee_name"],
                    session_id=int(r["session_id"]) if r.get("session_id") is not None else None,
                    client_id=int(r["client_id"]) if r.get("client_id") is not None else None,
                    check_in_time=r.get("checkin_time"),
                    check_out_time=r.get("checkout_time"),
                )
                for r in fetchall(cur)
            ]

    def get_team_checkins(self, *, manager_id: int, work_date: date) -> Sequence[TeamCheckinRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    ch.id, ch.employee_id, u.name AS employee_name,
                    ch.client_id, c.name AS client_name,
                    ch.checkin_time, ch.checkout_time, ch.status
                FROM checkins ch
                JOIN users u ON u.id = ch.employee_id
                JOIN clients c ON c.id = ch.client_id
                WHERE u.manager_id=%s AND DATE(ch.checkin_time)=%s
                ORDER BY ch.checkin_time DESC, ch.id DESC
                """,
                (int(manager_id), work_date),
            )
            return [
                TeamCheckinRow(
                    session_id=int(r["id"]),
                    employee_id=int(r["employee_id"]),
                    employee_name=r["employee_name"],
                    client_id=int(r["client_id"]),
                    client_name=r["client_name"],
                    check_in_time=r["checkin_time"],
                    check_out_time=r.get("checkout_time"),
                    status=r["status"],
                )
                for r in fetchall(cur)
            ]

    def count_open_team_sessions(self, manager_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS open_count
                FROM checkins ch
                JOIN users u ON u.id = ch.employee_id
                WHERE u.manager_id=%s AND ch.status=%s
                """,
                (int(manager_id), SessionStatus.CHECKED_IN.value),
            )
            r = fetchone(cur)
            return int(r["open_count"]) if r else 0

    def get_checkin_stats_since(self, *, employee_id: int, since: datetime) -> WeeklyStats:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS total_checkins, COUNT(DISTINCT client_id) AS unique_clients
                FROM checkins
                WHERE employee_id=%s AND checkin_time >= %s
                """,
                (int(employee_id), since),
            )
            r = fetchone(cur) or {}
            return WeeklyStats(
                total_checkins=int(r.get("total_checkins") or 0),
                unique_clients=int(r.get("unique_clients") or 0),
            )
