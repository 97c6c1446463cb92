from __future__ import annotations

from .base import DayContext, DayStrategy, StatusDecision


class LeaveStrategy(DayStrategy):
    """Approved leave: status follows the leave type (loss of pay is booked as A)."""

    def decide(self, ctx: DayContext) -> StatusDecision:
        if ctx.approved_leave is None:
            raise ValueError("LeaveStrategy cần một đơn nghỉ phép đã duyệt")
        kind = ctx.approved_leave.kind
        return StatusDecision(status=kind.status, leave_type=kind)
