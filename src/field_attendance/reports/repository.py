from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import TeamCheckinRow, TeamSessionRow, WeeklyStats


class ReportRepository(Protocol):
    def get_team_sessions(
        self,
        *,
        manager_id: int,
        work_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[TeamSessionRow]:
        """Every managed employee left-joined with their sessions checked in on `work_date`."""

        raise NotImplementedError

    def get_team_checkins(self, *, manager_id: int, work_date: date) -> Sequence[TeamCheckinRow]:
        raise NotImplementedError

    def count_open_team_sessions(self, manager_id: int) -> int:
        raise NotImplementedError

    def get_checkin_stats_since(self, *, employee_id: int, since: datetime) -> WeeklyStats:
        raise NotImplementedError
