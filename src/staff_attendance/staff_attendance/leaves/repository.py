from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import LeaveInterval


class LeaveRepository(Protocol):
    def fetch_approved_leaves(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[str] = None,
    ) -> Sequence[LeaveInterval]:
        """Approved intervals overlapping [start_date, end_date]."""

        raise NotImplementedError
