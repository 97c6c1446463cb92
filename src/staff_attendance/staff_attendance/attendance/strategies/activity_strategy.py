from __future__ import annotations

from ...core.constants import FULL_DAY_HOURS, HALF_DAY_HOURS
from ...core.enums import StatusCode
from .base import DayContext, DayStrategy, StatusDecision


class ActivityStrategy(DayStrategy):
    """Worked day: weekend, work-from-home, then hour thresholds."""

    def __init__(
        self,
        *,
        full_day_hours: float = FULL_DAY_HOURS,
        half_day_hours: float = HALF_DAY_HOURS,
        minimal_activity_status: StatusCode = StatusCode.PRESENT,
    ):
        self.full_day_hours = float(full_day_hours)
        self.half_day_hours = float(half_day_hours)
        self.minimal_activity_status = minimal_activity_status

    def decide(self, ctx: DayContext) -> StatusDecision:
        if ctx.is_weekend:
            return StatusDecision(status=StatusCode.WEEKEND_PRESENT)
        if ctx.activity.is_work_from_home:
            return StatusDecision(status=StatusCode.WORK_FROM_HOME)

        hours = ctx.activity.worked_hours
        if hours >= self.full_day_hours:
            return StatusDecision(status=StatusCode.PRESENT)
        if hours >= self.half_day_hours:
            return StatusDecision(status=StatusCode.HALF_DAY)
        return StatusDecision(status=self.minimal_activity_status)
