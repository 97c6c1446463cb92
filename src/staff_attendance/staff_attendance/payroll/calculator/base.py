from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def worked_minutes(self, check_in: Optional[datetime], check_out: Optional[datetime]) -> int:
        raise NotImplementedError

    @abstractmethod
    def overtime_minutes(self, worked_minutes: int) -> float:
        raise NotImplementedError
