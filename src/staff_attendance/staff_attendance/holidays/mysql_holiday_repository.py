from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import UserCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date_text
from .catalogue import default_fixed_holidays
from .model import ConfiguredHoliday, FixedHoliday, PoolHoliday, RecurringHolidayRule
from .repository import HolidayRepository


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_fixed_holidays(self) -> Sequence[FixedHoliday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT name, holiday_date FROM fixed_holidays ORDER BY holiday_date")
            rows = fetchall(cur)
        if not rows:
            return default_fixed_holidays()
        return [
            FixedHoliday(date=normalize_mysql_date_text(r["holiday_date"]) or "", name=r.get("name") or "")
            for r in rows
        ]

    def fetch_recurring_rules(self) -> Sequence[RecurringHolidayRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT day_name, occurrence, staff_type FROM recurring_holidays")
            rows = fetchall(cur)
        rules = []
        for r in rows:
            staff_type = (r.get("staff_type") or UserCategory.OFFICE.value).strip().lower()
            rules.append(
                RecurringHolidayRule(
                    day=str(r["day_name"]),
                    n=int(r["occurrence"]),
                    type=UserCategory(staff_type) if staff_type in _CATEGORY_VALUES else UserCategory.OFFICE,
                )
            )
        return rules

    def fetch_pool_holidays(self, user_id: Optional[str] = None) -> Sequence[PoolHoliday]:
        sql = "SELECT user_id, holiday_name, holiday_date FROM user_holidays"
        params: tuple = ()
        if user_id is not None:
            sql += " WHERE user_id=%s"
            params = (user_id,)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            rows = fetchall(cur)
        return [
            PoolHoliday(
                user_id=str(r["user_id"]),
                holiday_date=normalize_mysql_date_text(r["holiday_date"]) or "",
                name=r.get("holiday_name") or "",
            )
            for r in rows
        ]

    def fetch_configured_holidays(self, category: UserCategory) -> Sequence[ConfiguredHoliday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT name, holiday_date
                FROM configured_holidays
                WHERE staff_type=%s
                ORDER BY holiday_date
                """,
                (category.value,),
            )
            rows = fetchall(cur)
        return [
            ConfiguredHoliday(date=normalize_mysql_date_text(r["holiday_date"]) or "", name=r.get("name") or "")
            for r in rows
        ]


_CATEGORY_VALUES = {c.value for c in UserCategory}
