from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional, Sequence


@dataclass(frozen=True)
class ShiftBand:
    """Thực thể miền (domain): Khung giờ vào ca, dùng để đếm số ngày theo ca."""

    shift_name: str
    start_time: time
    end_time: time

    def contains(self, value: time) -> bool:
        return self.start_time <= value < self.end_time


NIGHT_SHIFT = "Shift C"

DEFAULT_SHIFT_BANDS: tuple[ShiftBand, ...] = (
    ShiftBand(shift_name="Shift A", start_time=time(5, 0), end_time=time(8, 30)),
    ShiftBand(shift_name="GS", start_time=time(8, 30), end_time=time(11, 30)),
    ShiftBand(shift_name="Shift B", start_time=time(11, 30), end_time=time(20, 0)),
)


def shift_for_check_in(check_in: Optional[time], bands: Sequence[ShiftBand] = DEFAULT_SHIFT_BANDS) -> Optional[str]:
    """Band of a check-in time; anything outside the day bands is the night shift."""
    if check_in is None:
        return None
    for band in bands:
        if band.contains(check_in):
            return band.shift_name
    return NIGHT_SHIFT
