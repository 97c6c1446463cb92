from __future__ import annotations

from .base import WeekOffRule
from .lookback_rule import LookbackEscalationRule
from .weekly_presence_rule import WeeklyPresenceRule

LOOKBACK = "lookback"
WEEKLY_PRESENCE = "weekly_presence"


def week_off_rule_for(name: str) -> WeekOffRule:
    key = (name or LOOKBACK).strip().lower()
    if key == LOOKBACK:
        return LookbackEscalationRule()
    if key == WEEKLY_PRESENCE:
        return WeeklyPresenceRule()
    raise ValueError(f"Quy tắc ngày nghỉ tuần không hợp lệ: {name!r}")
