from __future__ import annotations

from typing import Any, Dict, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Employee
from .repository import UserRepository


def _row_to_employee(r: Dict[str, Any]) -> Employee:
    manager_id = r.get("manager_id")
    return Employee(
        employee_id=int(r["id"]),
        name=r["name"],
        email=r["email"],
        role=Role(r["role"]),
        manager_id=int(manager_id) if manager_id is not None else None,
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_team(self, manager_id: int) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, email, role, manager_id
                FROM users
                WHERE manager_id=%s
                ORDER BY name ASC, id ASC
                """,
                (int(manager_id),),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]
