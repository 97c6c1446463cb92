from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ...core.constants import WORK_FROM_HOME_MARKER
from ...core.enums import LeaveType, StatusCode
from ...leaves.model import LeaveInterval
from ..model import AttendanceEvent


@dataclass(frozen=True)
class DayActivity:
    """Events of one user-day, reduced to what classification needs."""

    events: tuple[AttendanceEvent, ...] = ()
    first_check_in: Optional[AttendanceEvent] = None
    last_check_out: Optional[AttendanceEvent] = None
    worked_minutes: int = 0
    ot_minutes: float = 0.0

    @property
    def has_activity(self) -> bool:
        return bool(self.events)

    @property
    def worked_hours(self) -> float:
        return self.worked_minutes / 60

    @property
    def is_work_from_home(self) -> bool:
        for event in (self.first_check_in, self.last_check_out):
            if event and WORK_FROM_HOME_MARKER in (event.location_name or "").lower():
                return True
        return False


@dataclass(frozen=True)
class DayContext:
    day: date
    activity: DayActivity
    is_company_holiday: bool = False
    is_recurring_holiday: bool = False
    is_weekend: bool = False
    approved_leave: Optional[LeaveInterval] = None


@dataclass(frozen=True)
class StatusDecision:
    status: StatusCode
    leave_type: Optional[LeaveType] = None


class DayStrategy(ABC):
    """Strategy Pattern: encapsulate how one kind of day gets its status."""

    @abstractmethod
    def decide(self, ctx: DayContext) -> StatusDecision:
        raise NotImplementedError
