from __future__ import annotations

from typing import Protocol, Sequence

from .model import Employee


class UserRepository(Protocol):
    def list_team(self, manager_id: int) -> Sequence[Employee]:
        """Employees whose manager is `manager_id`, ordered by name."""

        raise NotImplementedError
