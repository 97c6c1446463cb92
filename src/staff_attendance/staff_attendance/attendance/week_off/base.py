from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, timedelta
from typing import Sequence

from ...core.exceptions import SequenceOrderError
from ..model import DailyStatusRecord


def ensure_contiguous(records: Sequence[DailyStatusRecord]) -> None:
    """One user, one record per day, oldest first, no gaps."""
    for prev, cur in zip(records, records[1:]):
        if str(prev.user_id).strip().lower() != str(cur.user_id).strip().lower():
            raise SequenceOrderError(f"Chuỗi ngày chứa nhiều nhân viên: {prev.user_id!r} / {cur.user_id!r}")
        if cur.day != prev.day + timedelta(days=1):
            raise SequenceOrderError(f"Chuỗi ngày không liên tục: {prev.day} -> {cur.day}")


def trim_to_range(records: Sequence[DailyStatusRecord], start: date) -> list[DailyStatusRecord]:
    """Drop the lookback buffer in front of the requested range."""
    return [r for r in records if r.day >= start]


class WeekOffRule(ABC):
    """Second pass over a user's classified days that settles idle Sundays."""

    @abstractmethod
    def apply(self, records: Sequence[DailyStatusRecord]) -> list[DailyStatusRecord]:
        raise NotImplementedError
