from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import SessionStatus


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one check-in/check-out lifecycle at a client."""

    session_id: int
    employee_id: int
    client_id: int
    check_in_time: datetime
    check_out_time: Optional[datetime]
    latitude: float
    longitude: float
    distance_from_client: Optional[float]
    status: SessionStatus
    notes: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.status == SessionStatus.CHECKED_IN


@dataclass(frozen=True)
class HistoryEntry:
    """Read-model: a session joined with its client's name and address."""

    session: AttendanceSession
    client_name: str
    client_address: Optional[str]


@dataclass(frozen=True)
class CheckInResult:
    session: AttendanceSession
    distance_km: float
    warning: Optional[str] = None
