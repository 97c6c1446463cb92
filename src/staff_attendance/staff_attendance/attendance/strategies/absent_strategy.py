from __future__ import annotations

from ...core.enums import StatusCode
from .base import DayContext, DayStrategy, StatusDecision


class WeekOffStrategy(DayStrategy):
    """Idle Sunday. Tentative: the week-off pass may still turn it into A."""

    def decide(self, ctx: DayContext) -> StatusDecision:
        return StatusDecision(status=StatusCode.WEEK_OFF)


class AbsentStrategy(DayStrategy):
    def decide(self, ctx: DayContext) -> StatusDecision:
        return StatusDecision(status=StatusCode.ABSENT)
