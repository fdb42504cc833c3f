from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.enums import SessionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import ER_DUP_ENTRY, as_float, db_cursor, fetchall, fetchone
from .model import AttendanceSession, HistoryEntry
from .repository import AttendanceRepository

_SESSION_COLUMNS = """
    ch.id, ch.employee_id, ch.client_id, ch.checkin_time, ch.checkout_time,
    ch.latitude, ch.longitude, ch.distance_from_client, ch.notes, ch.status
"""


def row_to_session(r: Dict[str, Any]) -> AttendanceSession:
    return AttendanceSession(
        session_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        client_id=int(r["client_id"]),
        check_in_time=r["checkin_time"],
        check_out_time=r.get("checkout_time"),
        latitude=as_float(r["latitude"]),
        longitude=as_float(r["longitude"]),
        distance_from_client=as_float(r.get("distance_from_client")),
        status=SessionStatus(r["status"]),
        notes=r.get("notes"),
    )


def _row_to_entry(r: Dict[str, Any]) -> HistoryEntry:
    return HistoryEntry(
        session=row_to_session(r),
        client_name=r["client_name"],
        client_address=r.get("client_address"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active_for_employee(self, employee_id: int) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SESSION_COLUMNS}
                FROM checkins ch
                WHERE ch.employee_id=%s AND ch.status=%s
                """,
                (int(employee_id), SessionStatus.CHECKED_IN.value),
            )
            r = fetchone(cur)
            return row_to_session(r) if r else None

    def get_active_entry(self, employee_id: int) -> Optional[HistoryEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SESSION_COLUMNS},
                    c.name AS client_name, c.address AS client_address
                FROM checkins ch
                JOIN clients c ON c.id = ch.client_id
                WHERE ch.employee_id=%s AND ch.status=%s
                """,
                (int(employee_id), SessionStatus.CHECKED_IN.value),
            )
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def create_session(
        self,
        *,
        employee_id: int,
        client_id: int,
        check_in_time: datetime,
        latitude: float,
        longitude: float,
        distance_from_client: float,
        notes: Optional[str] = None,
    ) -> Optional[AttendanceSession]:
        # uq_checkins_open_employee rejects a second open row for the employee.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO checkins
                        (employee_id, client_id, checkin_time, latitude, longitude,
                         distance_from_client, notes, status)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(employee_id),
                        int(client_id),
                        check_in_time,
                        latitude,
                        longitude,
                        distance_from_client,
                        notes,
                        SessionStatus.CHECKED_IN.value,
                    ),
                )
                session_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as exc:
            if exc.errno == ER_DUP_ENTRY:
                return None
            raise

        return AttendanceSession(
            session_id=session_id,
            employee_id=int(employee_id),
            client_id=int(client_id),
            check_in_time=check_in_time,
            check_out_time=None,
            latitude=latitude,
            longitude=longitude,
            distance_from_client=distance_from_client,
            status=SessionStatus.CHECKED_IN,
            notes=notes,
        )

    def close_active_session(self, *, employee_id: int, check_out_time: datetime) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            # id = LAST_INSERT_ID(id) hands the closed row's id back to this
            # connection without a separate read before the write.
            cur.execute(
                """
                UPDATE checkins
                SET checkout_time=GREATEST(%s, checkin_time),
                    status=%s,
                    id=LAST_INSERT_ID(id)
                WHERE employee_id=%s AND status=%s
                """,
                (
                    check_out_time,
                    SessionStatus.CHECKED_OUT.value,
                    int(employee_id),
                    SessionStatus.CHECKED_IN.value,
                ),
            )
            if cur.rowcount == 0:
                return None

            cur.execute(
                f"""
                SELECT {_SESSION_COLUMNS}
                FROM checkins ch
                WHERE ch.id=LAST_INSERT_ID()
                """
            )
            r = fetchone(cur)
            return row_to_session(r) if r else None

    def get_history(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[HistoryEntry]:
        clauses = ["ch.employee_id=%s"]
        params: list[object] = [int(employee_id)]

        if start_date is not None:
            clauses.append("DATE(ch.checkin_time) >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("DATE(ch.checkin_time) <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SESSION_COLUMNS},
                    c.name AS client_name, c.address AS client_address
                FROM checkins ch
                JOIN clients c ON c.id = ch.client_id
                WHERE {where}
                ORDER BY ch.checkin_time DESC, ch.id DESC
                """,
                tuple(params),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]
