from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..assignments.service import AssignmentRegistry
from ..clients.model import Client, Coordinate
from ..clients.repository import ClientRepository
from ..common.datetime_utils import now_local
from ..common.validators import optional_iso_date, require_coordinate, require_int
from ..core.constants import FAR_FROM_CLIENT_KM, FAR_FROM_CLIENT_WARNING
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..geo.distance import rounded_distance_km
from .model import AttendanceSession, CheckInResult, HistoryEntry
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Check-in/check-out state machine for field employees.

    Every rule is re-derived from storage on each call; the service holds no
    state beyond its injected collaborators.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        clients: ClientRepository,
        registry: AssignmentRegistry,
    ):
        self._attendance = attendance
        self._clients = clients
        self._registry = registry

    def list_assigned_clients(self, employee_id: int) -> Sequence[Client]:
        return list(self._clients.list_assigned_to(int(employee_id)))

    def check_in(
        self,
        employee_id: int,
        client_id: Any,
        latitude: Any,
        longitude: Any,
        notes: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> CheckInResult:
        if client_id is None or latitude is None or longitude is None:
            raise ValidationError("Client ID, latitude and longitude are required")
        client_id = require_int(client_id, "Client ID")
        lat = require_coordinate(latitude, "Latitude", limit=90.0)
        lng = require_coordinate(longitude, "Longitude", limit=180.0)

        if not self._registry.is_authorized(employee_id, client_id):
            logger.warning("check-in refused: employee=%s is not assigned to client=%s", employee_id, client_id)
            raise AuthorizationError("You are not assigned to this client")

        if self._attendance.get_active_for_employee(int(employee_id)) is not None:
            raise ConflictError("You already have an active check-in. Please checkout first.")

        client = self._clients.get_by_id(client_id)
        if client is None:
            raise NotFoundError("Client not found")

        distance = rounded_distance_km(Coordinate(lat, lng), client.coordinate)
        now = now or now_local()

        session = self._attendance.create_session(
            employee_id=int(employee_id),
            client_id=client_id,
            check_in_time=now,
            latitude=lat,
            longitude=lng,
            distance_from_client=distance,
            notes=notes or None,
        )
        if session is None:
            # Lost the race to a concurrent check-in for the same employee.
            logger.warning("check-in refused by store: employee=%s already has an open session", employee_id)
            raise ConflictError("You already have an active check-in. Please checkout first.")

        warning = FAR_FROM_CLIENT_WARNING if distance > FAR_FROM_CLIENT_KM else None
        logger.info(
            "check-in %s: employee=%s client=%s distance_km=%.2f",
            session.session_id, session.employee_id, session.client_id, distance,
        )
        return CheckInResult(session=session, distance_km=distance, warning=warning)

    def check_out(self, employee_id: int, *, now: Optional[datetime] = None) -> AttendanceSession:
        now = now or now_local()

        session = self._attendance.close_active_session(employee_id=int(employee_id), check_out_time=now)
        if session is None:
            raise NotFoundError("No active check-in found")

        logger.info("check-out %s: employee=%s", session.session_id, session.employee_id)
        return session

    def get_active_session(self, employee_id: int) -> Optional[HistoryEntry]:
        return self._attendance.get_active_entry(int(employee_id))

    def get_history(
        self,
        employee_id: int,
        *,
        start_date: str | date | None = None,
        end_date: str | date | None = None,
    ) -> Sequence[HistoryEntry]:
        start = optional_iso_date(start_date, "start_date")
        end = optional_iso_date(end_date, "end_date")
        if start and end and start > end:
            raise ValidationError("start_date must not be after end_date")

        return list(self._attendance.get_history(int(employee_id), start_date=start, end_date=end))
