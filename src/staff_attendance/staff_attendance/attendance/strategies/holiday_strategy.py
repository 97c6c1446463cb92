from __future__ import annotations

from ...core.enums import StatusCode
from .base import DayContext, DayStrategy, StatusDecision


class CompanyHolidayStrategy(DayStrategy):
    """Fixed, pool or configured holiday."""

    def decide(self, ctx: DayContext) -> StatusDecision:
        if ctx.activity.has_activity:
            return StatusDecision(status=StatusCode.HOLIDAY_PRESENT)
        return StatusDecision(status=StatusCode.HOLIDAY)


class RecurringHolidayStrategy(DayStrategy):
    """Nth-weekday holiday; an idle one is booked as a floating holiday."""

    def decide(self, ctx: DayContext) -> StatusDecision:
        if ctx.activity.has_activity:
            return StatusDecision(status=StatusCode.HOLIDAY_PRESENT)
        return StatusDecision(status=StatusCode.FLOATING_HOLIDAY)
