from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.enums import UserCategory


class HolidayKind(str, Enum):
    FIXED = "fixed"
    RECURRING = "recurring"
    POOL = "pool"
    CONFIGURED = "configured"


@dataclass(frozen=True)
class FixedHoliday:
    """Company-wide, year-agnostic holiday stored as ``MM-DD``."""

    date: str
    name: str = ""

    def month_day(self) -> Optional[tuple[int, int]]:
        # "MM-DD", or a full "YYYY-MM-DD" coming from a DATE column.
        parts = (self.date or "").strip().split("-")
        if len(parts) < 2:
            return None
        try:
            return int(parts[-2]), int(parts[-1])
        except ValueError:
            return None


@dataclass(frozen=True)
class RecurringHolidayRule:
    """E.g. "2nd Saturday, office": ``day="Saturday", n=2, type=OFFICE``."""

    day: str
    n: int
    type: UserCategory = UserCategory.OFFICE


@dataclass(frozen=True)
class PoolHoliday:
    """A holiday a single user opted into; date format is not guaranteed."""

    user_id: str
    holiday_date: str
    name: str = ""


@dataclass(frozen=True)
class ConfiguredHoliday:
    """Admin-curated holiday for one staff category."""

    date: str
    name: str = ""


@dataclass(frozen=True)
class HolidayCheck:
    is_holiday: bool
    is_recurring: bool
    kind: Optional[HolidayKind] = None
