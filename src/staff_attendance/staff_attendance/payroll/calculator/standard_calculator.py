from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import round_half_up
from ...core.constants import OVERTIME_THRESHOLD_HOURS
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: last check-out minus first check-in, whole minutes, not below 0.

    Overtime is whatever exceeds an 8-hour day, rounded to 0.1 minute.
    """

    def __init__(self, *, overtime_threshold_hours: float = OVERTIME_THRESHOLD_HOURS):
        self._threshold_hours = float(overtime_threshold_hours)

    def worked_minutes(self, check_in: Optional[datetime], check_out: Optional[datetime]) -> int:
        if not check_in or not check_out:
            return 0
        minutes = int((check_out - check_in).total_seconds() // 60)
        return max(minutes, 0)

    def overtime_minutes(self, worked_minutes: int) -> float:
        hours = worked_minutes / 60
        if hours <= self._threshold_hours:
            return 0.0
        return round_half_up((hours - self._threshold_hours) * 60, 1)
