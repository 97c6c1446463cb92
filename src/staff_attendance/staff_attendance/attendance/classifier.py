"""Daily status classification.

Turns one user-day of events, plus the holiday / leave / weekend signals for
that day, into a single :class:`DailyStatusRecord`. Everything here is pure:
inputs are already-fetched collections and nothing is written anywhere.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, tzinfo
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import local_day
from ..core.constants import WEEKEND_DAY_NAME
from ..core.enums import EventType
from ..holidays.resolver import HolidayCalendar
from ..leaves.model import LeaveInterval
from ..leaves.resolver import find_approved_leave
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..users.model import StaffMember
from .factory import DayStrategyFactory
from .model import AttendanceEvent, DailyStatusRecord
from .strategies.base import DayActivity, DayContext

logger = logging.getLogger(__name__)


def is_weekend(day: date) -> bool:
    return day.strftime("%A") == WEEKEND_DAY_NAME


def group_events_by_day(
    events: Iterable[AttendanceEvent],
    tz: Optional[tzinfo] = None,
) -> dict[tuple[str, date], list[AttendanceEvent]]:
    """Bucket events by (normalized user id, local calendar day)."""
    grouped: dict[tuple[str, date], list[AttendanceEvent]] = defaultdict(list)
    for event in events:
        key = (str(event.user_id).strip().lower(), local_day(event.timestamp, tz))
        grouped[key].append(event)
    return grouped


class DailyStatusClassifier:
    def __init__(
        self,
        *,
        strategy_factory: Optional[DayStrategyFactory] = None,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._factory = strategy_factory or DayStrategyFactory()
        self._calculator = calculator or StandardPayrollCalculator()

    def summarize_activity(self, events: Iterable[AttendanceEvent]) -> DayActivity:
        ordered = tuple(sorted(events, key=lambda e: e.timestamp))
        if not ordered:
            return DayActivity()

        first_in = next((e for e in ordered if e.event_type == EventType.CHECK_IN), None)
        last_out = next((e for e in reversed(ordered) if e.event_type == EventType.CHECK_OUT), None)
        worked = self._calculator.worked_minutes(
            first_in.timestamp if first_in else None,
            last_out.timestamp if last_out else None,
        )
        return DayActivity(
            events=ordered,
            first_check_in=first_in,
            last_check_out=last_out,
            worked_minutes=worked,
            ot_minutes=self._calculator.overtime_minutes(worked),
        )

    def classify(
        self,
        day: date,
        events: Sequence[AttendanceEvent],
        *,
        user_id: str,
        approved_leave: Optional[LeaveInterval] = None,
        is_company_holiday: bool = False,
        is_recurring_holiday: bool = False,
        weekend: Optional[bool] = None,
    ) -> DailyStatusRecord:
        activity = self.summarize_activity(events)
        ctx = DayContext(
            day=day,
            activity=activity,
            is_company_holiday=is_company_holiday,
            is_recurring_holiday=is_recurring_holiday,
            is_weekend=is_weekend(day) if weekend is None else weekend,
            approved_leave=approved_leave,
        )
        strategy = self._factory.for_day(ctx)
        decision = strategy.decide(ctx)
        logger.debug("user=%s day=%s %s -> %s", user_id, day, type(strategy).__name__, decision.status.token)

        return DailyStatusRecord(
            user_id=user_id,
            day=day,
            status=decision.status,
            check_in=activity.first_check_in.timestamp if activity.first_check_in else None,
            check_out=activity.last_check_out.timestamp if activity.last_check_out else None,
            worked_minutes=activity.worked_minutes,
            ot_minutes=activity.ot_minutes,
            leave_type=decision.leave_type,
            has_activity=activity.has_activity,
        )

    def classify_days(
        self,
        *,
        user: StaffMember,
        days: Iterable[date],
        events_by_day: dict[tuple[str, date], list[AttendanceEvent]],
        leaves: Sequence[LeaveInterval],
        calendar: HolidayCalendar,
    ) -> list[DailyStatusRecord]:
        """Classify a user's days in chronological order."""
        user_key = str(user.user_id).strip().lower()
        category = user.staff_category
        records = []
        for day in days:
            holiday = calendar.check(day, user_id=user.user_id, category=category)
            records.append(
                self.classify(
                    day,
                    events_by_day.get((user_key, day), []),
                    user_id=user.user_id,
                    approved_leave=find_approved_leave(day, user.user_id, leaves),
                    is_company_holiday=holiday.is_holiday,
                    is_recurring_holiday=holiday.is_recurring,
                )
            )
        return records
