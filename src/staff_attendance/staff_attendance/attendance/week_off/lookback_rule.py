from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from ...core.constants import ESCALATION_ABSENCE_THRESHOLD, ESCALATION_LOOKBACK_DAYS
from ...core.enums import StatusCode
from ..model import DailyStatusRecord
from .base import WeekOffRule, ensure_contiguous

logger = logging.getLogger(__name__)


class LookbackEscalationRule(WeekOffRule):
    """A W/O Sunday becomes A when the 6 days before it hold at least 4 A.

    Counts are taken from the statuses as classified, so an escalated Sunday
    never feeds into a later lookback.
    """

    def __init__(
        self,
        *,
        lookback_days: int = ESCALATION_LOOKBACK_DAYS,
        absence_threshold: int = ESCALATION_ABSENCE_THRESHOLD,
    ):
        self.lookback_days = int(lookback_days)
        self.absence_threshold = int(absence_threshold)

    def apply(self, records: Sequence[DailyStatusRecord]) -> list[DailyStatusRecord]:
        original = tuple(records)
        ensure_contiguous(original)

        result: list[DailyStatusRecord] = []
        for index, record in enumerate(original):
            if record.status == StatusCode.WEEK_OFF and record.is_sunday:
                window = original[max(0, index - self.lookback_days):index]
                absences = sum(1 for prev in window if prev.status == StatusCode.ABSENT)
                if absences >= self.absence_threshold:
                    logger.debug("user=%s %s W/O -> A (%d absences)", record.user_id, record.day, absences)
                    record = replace(record, status=StatusCode.ABSENT)
            result.append(record)
        return result
