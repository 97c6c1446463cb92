from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import weekday_name
from ..core.enums import UserCategory
from .date_matcher import matches
from .model import (
    ConfiguredHoliday,
    FixedHoliday,
    HolidayCheck,
    HolidayKind,
    PoolHoliday,
    RecurringHolidayRule,
)

logger = logging.getLogger(__name__)


def is_fixed_holiday(day: date, fixed: Iterable[FixedHoliday]) -> bool:
    for holiday in fixed:
        md = holiday.month_day()
        if md and md == (day.month, day.day):
            return True
    return False


def week_occurrence(day: date) -> int:
    """1 for days 1-7, 2 for days 8-14, ... (ceil(day / 7))."""
    return (day.day - 1) // 7 + 1


def is_recurring_holiday(day: date, category: UserCategory, rules: Iterable[RecurringHolidayRule]) -> bool:
    # Site staff follow the office recurring calendar.
    rule_category = UserCategory.OFFICE if category == UserCategory.SITE else category
    name = weekday_name(day).lower()
    occurrence = week_occurrence(day)
    for rule in rules:
        if (rule.day or "").strip().lower() != name:
            continue
        if _rule_category(rule) == rule_category and int(rule.n) == occurrence:
            return True
    return False


def _rule_category(rule: RecurringHolidayRule) -> Optional[UserCategory]:
    raw = rule.type.value if isinstance(rule.type, UserCategory) else str(rule.type or "office")
    try:
        return UserCategory(raw.strip().lower())
    except ValueError:
        return None


def same_user(a: object, b: object) -> bool:
    return str(a).strip().lower() == str(b).strip().lower()


def is_pool_holiday(day: date, user_id: str, pool: Iterable[PoolHoliday]) -> bool:
    for holiday in pool:
        if not holiday.user_id or not holiday.holiday_date:
            continue
        if same_user(holiday.user_id, user_id) and matches(holiday.holiday_date, day):
            return True
    return False


def is_configured_holiday(day: date, configured: Iterable[ConfiguredHoliday]) -> bool:
    return any(matches(h.date, day) for h in configured)


def resolve_holiday(
    day: date,
    *,
    user_id: str,
    category: UserCategory,
    fixed: Iterable[FixedHoliday] = (),
    recurring: Iterable[RecurringHolidayRule] = (),
    pool: Iterable[PoolHoliday] = (),
    configured: Iterable[ConfiguredHoliday] = (),
) -> HolidayCheck:
    """Decide whether ``day`` is a holiday for this user.

    Fixed, pool and configured holidays are folded into ``is_holiday``.
    Recurring holidays are reported separately because they rank below the
    other three in classification.
    """

    kind = None
    if is_fixed_holiday(day, fixed):
        kind = HolidayKind.FIXED
    elif is_pool_holiday(day, user_id, pool):
        kind = HolidayKind.POOL
    elif is_configured_holiday(day, configured):
        kind = HolidayKind.CONFIGURED

    recurring_hit = is_recurring_holiday(day, category, recurring)
    if kind is None and recurring_hit:
        return HolidayCheck(is_holiday=False, is_recurring=True, kind=HolidayKind.RECURRING)
    return HolidayCheck(is_holiday=kind is not None, is_recurring=recurring_hit, kind=kind)


@dataclass(frozen=True)
class HolidayCalendar:
    """All holiday sources for one report run, injected explicitly."""

    fixed: Sequence[FixedHoliday] = ()
    recurring: Sequence[RecurringHolidayRule] = ()
    pool: Sequence[PoolHoliday] = ()
    configured: Mapping[UserCategory, Sequence[ConfiguredHoliday]] = field(default_factory=dict)

    def for_user(self, user_id: str) -> "HolidayCalendar":
        """Same calendar with the pool narrowed to one user."""
        pool = tuple(h for h in self.pool if h.user_id and same_user(h.user_id, user_id))
        return HolidayCalendar(fixed=self.fixed, recurring=self.recurring, pool=pool, configured=self.configured)

    def check(self, day: date, *, user_id: str, category: UserCategory) -> HolidayCheck:
        result = resolve_holiday(
            day,
            user_id=user_id,
            category=category,
            fixed=self.fixed,
            recurring=self.recurring,
            pool=self.pool,
            configured=self.configured.get(category, ()),
        )
        if result.kind is not None:
            logger.debug("%s is a %s holiday for user %s", day, result.kind.value, user_id)
        return result
