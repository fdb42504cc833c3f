from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import AssignmentRepository


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists(self, *, employee_id: int, client_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT 1 AS found
                FROM employee_clients
                WHERE employee_id=%s AND client_id=%s
                LIMIT 1
                """,
                (int(employee_id), int(client_id)),
            )
            return fetchone(cur) is not None
