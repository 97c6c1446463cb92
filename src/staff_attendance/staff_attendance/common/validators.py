from __future__ import annotations

from datetime import date

from ..core.exceptions import ValidationError


def require_date_range(start: date, end: date) -> tuple[date, date]:
    if start > end:
        raise ValidationError("Ngày bắt đầu không thể sau ngày kết thúc")
    return start, end
