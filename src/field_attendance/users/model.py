from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee or manager."""

    employee_id: int
    name: str
    email: str
    role: Role
    manager_id: Optional[int] = None


@dataclass(frozen=True)
class Identity:
    """Signed-in caller, as established by the authentication layer."""

    user_id: int
    role: Role
    manager_id: Optional[int] = None

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER
