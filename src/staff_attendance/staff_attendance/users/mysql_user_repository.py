from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import UserCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import StaffMember
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[StaffMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, full_name, role, staff_category FROM users WHERE user_id=%s AND is_active=1",
                (user_id,),
            )
            rows = fetchall(cur)
        return self._to_model(rows[0]) if rows else None

    def list_staff(self) -> Sequence[StaffMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, role, staff_category
                FROM users
                WHERE is_active=1
                ORDER BY full_name
                """
            )
            rows = fetchall(cur)
        return [self._to_model(r) for r in rows]

    @staticmethod
    def _to_model(r: Dict[str, Any]) -> StaffMember:
        raw_category = (r.get("staff_category") or "").strip().lower()
        category = UserCategory(raw_category) if raw_category in {c.value for c in UserCategory} else None
        return StaffMember(
            user_id=str(r["user_id"]),
            name=r.get("full_name") or "",
            role=(r.get("role") or "").strip().lower(),
            category=category,
        )
