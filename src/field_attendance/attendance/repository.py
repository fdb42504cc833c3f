from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceSession, HistoryEntry


class AttendanceRepository(Protocol):
    def get_active_for_employee(self, employee_id: int) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def get_active_entry(self, employee_id: int) -> Optional[HistoryEntry]:
        """The open session joined with its client's name and address."""

        raise NotImplementedError

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
        """Insert an open session in one constrained statement.

        Returns None when the store already holds an open session for the
        employee (the single-open-session unique key rejected the row).
        """

        raise NotImplementedError

    def close_active_session(self, *, employee_id: int, check_out_time: datetime) -> Optional[AttendanceSession]:
        """Conditionally close the employee's open session.

        The check-out time stored is never earlier than the check-in time.
        Returns None when no open session exists.
        """

        raise NotImplementedError

    def get_history(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[HistoryEntry]:
        """Sessions joined with client details, most recent check-in first."""

        raise NotImplementedError
