from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceEvent


class AttendanceEventRepository(Protocol):
    def fetch_events(
        self,
        *,
        user_id: Optional[str],
        start: datetime,
        end: datetime,
    ) -> Sequence[AttendanceEvent]:
        """Events in [start, end] for one user, or for everyone when ``user_id`` is None."""

        raise NotImplementedError
