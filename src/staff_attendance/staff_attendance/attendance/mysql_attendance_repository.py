from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import EventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceEvent
from .repository import AttendanceEventRepository


class MySQLAttendanceEventRepository(AttendanceEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_events(
        self,
        *,
        user_id: Optional[str],
        start: datetime,
        end: datetime,
    ) -> Sequence[AttendanceEvent]:
        where = ["ae.event_time BETWEEN %s AND %s"]
        params: list = [start, end]
        if user_id is not None:
            where.append("ae.user_id=%s")
            params.append(user_id)

        sql = f"""
            SELECT ae.user_id, ae.event_time, ae.event_type, ae.location_name, ae.latitude, ae.longitude
            FROM attendance_events ae
            WHERE {' AND '.join(where)}
            ORDER BY ae.event_time
        """

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            rows = fetchall(cur)
        return [
            AttendanceEvent(
                user_id=str(r["user_id"]),
                timestamp=r["event_time"],
                event_type=EventType((r["event_type"] or "").strip().lower()),
                location_name=r.get("location_name"),
                latitude=float(r["latitude"]) if r.get("latitude") is not None else None,
                longitude=float(r["longitude"]) if r.get("longitude") is not None else None,
            )
            for r in rows
        ]
