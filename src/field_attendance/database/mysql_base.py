from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode

ER_DUP_ENTRY = errorcode.ER_DUP_ENTRY


@contextmanager
def db_cursor(conn_factory, *, dictionary: bool = True):
    """One connection, one transaction: commit on success, rollback on error.

    `conn_factory` is anything with a connect() returning a DB-API connection.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def as_float(value: Any) -> Optional[float]:
    # DECIMAL columns come back as Decimal.
    return None if value is None else float(value)
