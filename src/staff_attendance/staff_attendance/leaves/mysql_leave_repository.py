from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall
from .model import LeaveInterval
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_approved_leaves(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[str] = None,
    ) -> Sequence[LeaveInterval]:
        where = ["lr.status=%s", "lr.start_date<=%s", "lr.end_date>=%s"]
        params: list = [LeaveStatus.APPROVED.value, end_date, start_date]
        if user_id is not None:
            where.append("lr.user_id=%s")
            params.append(user_id)

        sql = f"""
            SELECT lr.user_id, lr.start_date, lr.end_date, lr.leave_type, lr.status
            FROM leave_requests lr
            WHERE {' AND '.join(where)}
            ORDER BY lr.start_date
        """

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            rows = fetchall(cur)
        return [
            LeaveInterval(
                user_id=str(r["user_id"]),
                start_date=as_date(r["start_date"]),
                end_date=as_date(r["end_date"]),
                leave_type=r.get("leave_type") or "",
                status=LeaveStatus((r.get("status") or "approved").strip().lower()),
            )
            for r in rows
        ]
