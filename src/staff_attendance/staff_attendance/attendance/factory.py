from __future__ import annotations

from dataclasses import dataclass, field

from ..core.constants import FULL_DAY_HOURS, HALF_DAY_HOURS
from ..core.enums import LeavePrecedence, StatusCode
from .strategies.absent_strategy import AbsentStrategy, WeekOffStrategy
from .strategies.activity_strategy import ActivityStrategy
from .strategies.base import DayContext, DayStrategy
from .strategies.holiday_strategy import CompanyHolidayStrategy, RecurringHolidayStrategy
from .strategies.leave_strategy import LeaveStrategy


@dataclass
class DayStrategyFactory:
    """Factory Pattern: pick the strategy for a day, in precedence order.

    company holiday > recurring holiday > approved leave / activity > Sunday > absent.
    With ``ACTIVITY_FIRST`` a leave only applies when the day has no events;
    with ``LEAVE_FIRST`` the leave wins even over recorded activity.
    """

    leave_precedence: LeavePrecedence = LeavePrecedence.ACTIVITY_FIRST
    full_day_hours: float = FULL_DAY_HOURS
    half_day_hours: float = HALF_DAY_HOURS
    minimal_activity_status: StatusCode = StatusCode.PRESENT
    _activity: ActivityStrategy = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._activity = ActivityStrategy(
            full_day_hours=self.full_day_hours,
            half_day_hours=self.half_day_hours,
            minimal_activity_status=self.minimal_activity_status,
        )

    def for_day(self, ctx: DayContext) -> DayStrategy:
        if ctx.is_company_holiday:
            return CompanyHolidayStrategy()
        if ctx.is_recurring_holiday:
            return RecurringHolidayStrategy()

        has_activity = ctx.activity.has_activity
        if ctx.approved_leave is not None:
            if not has_activity or self.leave_precedence == LeavePrecedence.LEAVE_FIRST:
                return LeaveStrategy()

        if has_activity:
            return self._activity
        if ctx.is_weekend:
            return WeekOffStrategy()
        return AbsentStrategy()
