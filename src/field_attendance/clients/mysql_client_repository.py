from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import Client
from .repository import ClientRepository


def _row_to_client(r: Dict[str, Any]) -> Client:
    return Client(
        client_id=int(r["id"]),
        name=r["name"],
        address=r.get("address"),
        latitude=as_float(r["latitude"]),
        longitude=as_float(r["longitude"]),
    )


class MySQLClientRepository(ClientRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, client_id: int) -> Optional[Client]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, address, latitude, longitude FROM clients WHERE id=%s",
                (int(client_id),),
            )
            r = fetchone(cur)
            return _row_to_client(r) if r else None

    def list_assigned_to(self, employee_id: int) -> Sequence[Client]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT c.id, c.name, c.address, c.latitude, c.longitude
                FROM clients c
                JOIN employee_clients ec ON ec.client_id = c.id
                WHERE ec.employee_id=%s
                """,
                (int(employee_id),),
            )
            return [_row_to_client(r) for r in fetchall(cur)]
