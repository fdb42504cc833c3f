from __future__ import annotations

from typing import Protocol


class AssignmentRepository(Protocol):
    def exists(self, *, employee_id: int, client_id: int) -> bool:
        raise NotImplementedError
