from __future__ import annotations

from typing import Optional

from .repository import AssignmentRepository


class AssignmentRegistry:
    """Answers whether an employee may check in at a client."""

    def __init__(self, assignments: AssignmentRepository):
        self._assignments = assignments

    def is_authorized(self, employee_id: Optional[int], client_id: Optional[int]) -> bool:
        # Unknown ids simply have no assignment row.
        if employee_id is None or client_id is None:
            return False
        return self._assignments.exists(employee_id=int(employee_id), client_id=int(client_id))
