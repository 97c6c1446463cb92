"""Monthly roll-up of finalized daily statuses into payroll counters."""
from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field, fields
from datetime import tzinfo
from typing import Optional, Sequence

from ..attendance.model import DailyStatusRecord
from ..common.datetime_utils import local_time, round_half_up
from ..core.enums import StatusCode
from ..shifts.model import shift_for_check_in

_COUNTER_FOR_STATUS = {
    StatusCode.PRESENT: "present_days",
    StatusCode.ABSENT: "absent_days",
    StatusCode.HALF_DAY: "half_days",
    StatusCode.WEEK_OFF: "week_offs",
    StatusCode.HOLIDAY: "holidays",
    StatusCode.WEEKEND_PRESENT: "weekend_presents",
    StatusCode.HOLIDAY_PRESENT: "holiday_presents",
    StatusCode.SICK_LEAVE: "sick_leaves",
    StatusCode.EARNED_LEAVE: "earned_leaves",
    StatusCode.FLOATING_HOLIDAY: "floating_holidays",
    StatusCode.COMP_OFF: "comp_offs",
    StatusCode.WORK_FROM_HOME: "work_from_home_days",
}


@dataclass(frozen=True)
class MonthlyCounters:
    present_days: int = 0
    absent_days: int = 0
    half_days: int = 0
    week_offs: int = 0
    holidays: int = 0
    weekend_presents: int = 0
    holiday_presents: int = 0
    sick_leaves: int = 0
    earned_leaves: int = 0
    floating_holidays: int = 0
    comp_offs: int = 0
    work_from_home_days: int = 0
    # Sub-count of absent_days; not part of the day total.
    loss_of_pays: int = 0

    def day_total(self) -> int:
        """Sum of the mutually exclusive counters (equals the number of days)."""
        return sum(getattr(self, f.name) for f in fields(self) if f.name != "loss_of_pays")

    @property
    def total_payable_days(self) -> float:
        return float(
            self.present_days
            + self.week_offs
            + self.holidays
            + self.weekend_presents
            + self.holiday_presents
            + self.half_days * 0.5
            + self.sick_leaves
            + self.earned_leaves
            + self.floating_holidays
            + self.comp_offs
            + self.work_from_home_days
        )


@dataclass(frozen=True)
class MonthlyAggregate:
    user_id: str
    statuses: tuple[StatusCode, ...]
    counters: MonthlyCounters
    total_payable_days: float
    total_worked_minutes: int = 0
    total_ot_hours: float = 0.0
    average_working_hours: float = 0.0
    shift_counts: dict[str, int] = field(default_factory=dict)

    @property
    def status_tokens(self) -> list[str]:
        return [s.token for s in self.statuses]

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "statuses": self.status_tokens,
            **asdict(self.counters),
            "total_payable_days": self.total_payable_days,
            "total_worked_minutes": self.total_worked_minutes,
            "total_ot_hours": self.total_ot_hours,
            "average_working_hours": self.average_working_hours,
            "shift_counts": dict(self.shift_counts),
        }


def aggregate(
    records: Sequence[DailyStatusRecord],
    *,
    user_id: Optional[str] = None,
    tz: Optional[tzinfo] = None,
) -> MonthlyAggregate:
    """Fold an ordered sequence of a user's final daily records."""
    tally: Counter[str] = Counter()
    shifts: Counter[str] = Counter()
    worked_minutes = 0
    ot_hours = 0.0

    for record in records:
        tally[_COUNTER_FOR_STATUS[record.status]] += 1
        if record.is_loss_of_pay:
            tally["loss_of_pays"] += 1
        if record.has_activity:
            worked_minutes += record.worked_minutes
            ot_hours += record.ot_hours
        if record.check_in is not None:
            shift = shift_for_check_in(local_time(record.check_in, tz).time())
            if shift:
                shifts[shift] += 1

    counters = MonthlyCounters(**tally)
    average = worked_minutes / 60 / counters.present_days if counters.present_days else 0.0

    return MonthlyAggregate(
        user_id=user_id if user_id is not None else (records[0].user_id if records else ""),
        statuses=tuple(r.status for r in records),
        counters=counters,
        total_payable_days=counters.total_payable_days,
        total_worked_minutes=worked_minutes,
        total_ot_hours=round_half_up(ot_hours, 1),
        average_working_hours=round_half_up(average, 2),
        shift_counts=dict(shifts),
    )
