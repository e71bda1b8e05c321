from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...attendance.model import AttendanceEntry
from ...shifts.model import ShiftTemplate


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for paid minutes)."""

    @abstractmethod
    def worked_minutes(self, entry: AttendanceEntry, shift: Optional[ShiftTemplate]) -> int:
        raise NotImplementedError
