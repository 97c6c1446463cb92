from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import UserCategory
from .model import ConfiguredHoliday, FixedHoliday, PoolHoliday, RecurringHolidayRule


class HolidayRepository(Protocol):
    """Read side of the four holiday sources."""

    def fetch_fixed_holidays(self) -> Sequence[FixedHoliday]:
        raise NotImplementedError

    def fetch_recurring_rules(self) -> Sequence[RecurringHolidayRule]:
        raise NotImplementedError

    def fetch_pool_holidays(self, user_id: Optional[str] = None) -> Sequence[PoolHoliday]:
        """Pool selections of one user, or of everyone when ``user_id`` is None."""

        raise NotImplementedError

    def fetch_configured_holidays(self, category: UserCategory) -> Sequence[ConfiguredHoliday]:
        raise NotImplementedError
