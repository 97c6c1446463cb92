from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import round_half_up, weekday_name
from ..core.enums import EventType, LeaveType, StatusCode


@dataclass(frozen=True)
class AttendanceEvent:
    """Thực thể miền (domain): Một lần chấm công vào/ra."""

    user_id: str
    timestamp: datetime
    event_type: EventType
    location_name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(frozen=True)
class DailyStatusRecord:
    """One status per user per calendar day.

    Created by the classifier; the week-off pass may replace it once with an
    ``A`` copy. Never mutated.
    """

    user_id: str
    day: date
    status: StatusCode
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    worked_minutes: int = 0
    ot_minutes: float = 0.0
    leave_type: Optional[LeaveType] = None
    has_activity: bool = False

    @property
    def weekday(self) -> str:
        return weekday_name(self.day)

    @property
    def is_sunday(self) -> bool:
        return self.day.weekday() == 6

    @property
    def is_loss_of_pay(self) -> bool:
        return self.status == StatusCode.ABSENT and self.leave_type == LeaveType.LOSS_OF_PAY

    @property
    def ot_hours(self) -> float:
        return round_half_up(self.ot_minutes / 60, 1)
