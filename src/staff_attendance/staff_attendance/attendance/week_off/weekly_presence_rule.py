from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from ...core.constants import HALF_DAY_HOURS, WEEKLY_PRESENCE_THRESHOLD
from ...core.enums import StatusCode
from ..model import DailyStatusRecord
from .base import WeekOffRule, ensure_contiguous

logger = logging.getLogger(__name__)

_WORKED_STATUSES = frozenset(
    {StatusCode.PRESENT, StatusCode.HALF_DAY, StatusCode.WORK_FROM_HOME, StatusCode.WEEKEND_PRESENT}
)


class WeeklyPresenceRule(WeekOffRule):
    """A W/O Sunday stays W/O only if it is the month's first Sunday or at
    least 4 worked days (half-day hours or more) came since the last idle Sunday.
    """

    def __init__(
        self,
        *,
        presence_threshold: int = WEEKLY_PRESENCE_THRESHOLD,
        min_hours: float = HALF_DAY_HOURS,
    ):
        self.presence_threshold = int(presence_threshold)
        self.min_minutes = float(min_hours) * 60

    def apply(self, records: Sequence[DailyStatusRecord]) -> list[DailyStatusRecord]:
        ensure_contiguous(records)

        result: list[DailyStatusRecord] = []
        worked_days = 0
        for record in records:
            if record.status in _WORKED_STATUSES and record.worked_minutes >= self.min_minutes:
                worked_days += 1

            if record.status == StatusCode.WEEK_OFF and record.is_sunday:
                first_sunday = record.day.day <= 7
                if not first_sunday and worked_days < self.presence_threshold:
                    logger.debug("user=%s %s W/O -> A (%d worked days)", record.user_id, record.day, worked_days)
                    record = replace(record, status=StatusCode.ABSENT)
                # Only an idle Sunday closes the week; WOP or holiday Sundays carry the count.
                worked_days = 0
            result.append(record)
        return result
