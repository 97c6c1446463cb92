from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
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


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_date_text(value: Any) -> Optional[str]:
    """Holiday date columns are VARCHAR in some tables and DATE in others.

    mysql-connector can return them as:
    - datetime.date / datetime.datetime
    - string (e.g. '2025-01-15', '-01-15', '15/01/2025')
    - bytes for legacy latin1 columns
    """

    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date().isoformat()

    if isinstance(value, date):
        return value.isoformat()

    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace").strip()

    if isinstance(value, str):
        return value.strip()

    raise TypeError(f"Kiểu giá trị ngày MySQL không được hỗ trợ: {type(value)!r}")


def as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    raise TypeError(f"Kiểu giá trị DATE MySQL không được hỗ trợ: {type(value)!r}")
