from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveInterval:
    """Thực thể miền (domain): Khoảng nghỉ phép, ngày đầu và ngày cuối đều tính."""

    user_id: str
    start_date: date
    end_date: date
    leave_type: str
    status: LeaveStatus = LeaveStatus.APPROVED

    @property
    def is_approved(self) -> bool:
        status = self.status.value if isinstance(self.status, LeaveStatus) else str(self.status)
        return status.strip().lower() == LeaveStatus.APPROVED.value

    @property
    def kind(self) -> LeaveType:
        return LeaveType.from_label(self.leave_type)

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
