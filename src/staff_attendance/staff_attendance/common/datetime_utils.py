from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Iterator, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Ngày không hợp lệ (YYYY-MM-DD): {value!r}")



def load_timezone(name: Optional[str]) -> Optional[tzinfo]:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:
        raise ValidationError(f"Múi giờ không hợp lệ: {name!r}")


def each_day(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day in [start, end]."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def local_day(timestamp: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar day of an event, in ``tz`` when the timestamp is aware."""
    if tz is not None and timestamp.tzinfo is not None:
        return timestamp.astimezone(tz).date()
    return timestamp.date()


def local_time(timestamp: datetime, tz: Optional[tzinfo] = None) -> datetime:
    if tz is not None and timestamp.tzinfo is not None:
        return timestamp.astimezone(tz)
    return timestamp


def weekday_name(day: date) -> str:
    return day.strftime("%A")


def format_duration(minutes: int) -> str:
    return f"{minutes // 60}h {minutes % 60}m"


def round_half_up(value: float, digits: int = 1) -> float:
    """Round like the payroll sheets do (0.05 -> 0.1), not banker's rounding."""
    factor = 10 ** digits
    return int(value * factor + 0.5) / factor if value >= 0 else -round_half_up(-value, digits)
