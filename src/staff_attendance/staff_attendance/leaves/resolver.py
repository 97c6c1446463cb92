from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..holidays.resolver import same_user
from .model import LeaveInterval


def find_approved_leave(day: date, user_id: str, leaves: Iterable[LeaveInterval]) -> Optional[LeaveInterval]:
    """First approved interval of this user that covers ``day``."""
    for leave in leaves:
        if leave.is_approved and same_user(leave.user_id, user_id) and leave.covers(day):
            return leave
    return None
