from __future__ import annotations

from enum import Enum
from typing import Optional


class StatusCode(str, Enum):
    """Daily attendance status. Values are the tokens report layouts match on."""

    PRESENT = "P"
    HALF_DAY = "0.5P"
    ABSENT = "A"
    HOLIDAY = "H"
    HOLIDAY_PRESENT = "H/P"
    FLOATING_HOLIDAY = "F/H"
    WEEK_OFF = "W/O"
    WEEKEND_PRESENT = "WOP"
    WORK_FROM_HOME = "W/H"
    SICK_LEAVE = "S/L"
    EARNED_LEAVE = "E/L"
    COMP_OFF = "C/O"

    @property
    def token(self) -> str:
        return self.value

    @classmethod
    def from_token(cls, token: str) -> "StatusCode":
        value = (token or "").strip().upper()
        value = _STATUS_ALIASES.get(value, value)
        for code in cls:
            if code.value == value:
                return code
        raise ValueError(f"Mã trạng thái không hợp lệ: {token!r}")


_STATUS_ALIASES = {
    "HP": "H/P",
    "W/P": "WOP",
    "1/2P": "0.5P",
}


# Days that count as "present" on the employee attendance view.
PRESENT_STATUSES = frozenset(
    {
        StatusCode.PRESENT,
        StatusCode.WORK_FROM_HOME,
        StatusCode.WEEKEND_PRESENT,
        StatusCode.HOLIDAY_PRESENT,
        StatusCode.HALF_DAY,
    }
)


class LeaveType(str, Enum):
    """Canonical leave vocabulary; free-text labels are folded into it."""

    SICK = "sick"
    COMP_OFF = "comp_off"
    FLOATING = "floating"
    LOSS_OF_PAY = "loss_of_pay"
    EARNED = "earned"

    @classmethod
    def from_label(cls, label: Optional[str]) -> "LeaveType":
        normalized = " ".join((label or "").strip().lower().split())
        if normalized in {"sick", "sick leave"}:
            return cls.SICK
        if normalized in {"comp off", "comp-off", "compoff", "c/o"}:
            return cls.COMP_OFF
        if normalized in {"floating", "floating holiday"}:
            return cls.FLOATING
        if normalized in {"loss of pay", "loss-of-pay", "lop"}:
            return cls.LOSS_OF_PAY
        return cls.EARNED

    @property
    def status(self) -> StatusCode:
        return _LEAVE_STATUS[self]


_LEAVE_STATUS = {
    LeaveType.SICK: StatusCode.SICK_LEAVE,
    LeaveType.COMP_OFF: StatusCode.COMP_OFF,
    LeaveType.FLOATING: StatusCode.FLOATING_HOLIDAY,
    LeaveType.LOSS_OF_PAY: StatusCode.ABSENT,
    LeaveType.EARNED: StatusCode.EARNED_LEAVE,
}


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class EventType(str, Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


class UserCategory(str, Enum):
    """Staff category used to pick recurring and configured holiday lists."""

    OFFICE = "office"
    FIELD = "field"
    SITE = "site"


class LeavePrecedence(str, Enum):
    """Whether activity on an approved-leave day overrides the leave."""

    ACTIVITY_FIRST = "activity_first"
    LEAVE_FIRST = "leave_first"


class RecordType(str, Enum):
    """Check-in/out completeness filter for the basic report."""

    ALL = "all"
    COMPLETE = "complete"
    MISSING_CHECKOUT = "missing_checkout"
    MISSING_CHECKIN = "missing_checkin"
    INCOMPLETE = "incomplete"
