from __future__ import annotations

from ..core.constants import DEFAULT_FIXED_HOLIDAYS, HOLIDAY_SELECTION_POOL
from .model import FixedHoliday


def default_fixed_holidays() -> list[FixedHoliday]:
    return [FixedHoliday(date=h["date"], name=h["name"]) for h in DEFAULT_FIXED_HOLIDAYS]


def pool_choices() -> list[dict]:
    """Holidays a user may opt into; dates are year-agnostic ``-MM-DD``."""
    return [{"name": h["name"], "date": h["date"]} for h in HOLIDAY_SELECTION_POOL]

