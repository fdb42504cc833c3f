from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Assignment:
    """Authorizes an employee to check in at a client."""

    employee_id: int
    client_id: int
    assigned_date: date
