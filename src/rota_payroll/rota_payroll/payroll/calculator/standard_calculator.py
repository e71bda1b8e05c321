from __future__ import annotations

from typing import Optional

from .base import PayrollCalculator
from ...attendance.model import AttendanceEntry
from ...core.exceptions import ValidationError
from ...shifts.model import ShiftTemplate
from ..overlap import elapsed_minutes, overlap_minutes


class ShiftOverlapCalculator(PayrollCalculator):
    """Standard rule: only minutes inside the shift window are paid."""

    def worked_minutes(self, entry: AttendanceEntry, shift: Optional[ShiftTemplate]) -> int:
        return overlap_minutes(entry, shift)


class ElapsedTimeCalculator(PayrollCalculator):
    """Pay the whole logged window regardless of the shift template."""

    def worked_minutes(self, entry: AttendanceEntry, shift: Optional[ShiftTemplate]) -> int:
        return elapsed_minutes(entry)


CALCULATORS = {
    "overlap": ShiftOverlapCalculator,
    "elapsed": ElapsedTimeCalculator,
}


def calculator_for(name: Optional[str]) -> PayrollCalculator:
    """Pick the paid-time rule by its settings name; empty means overlap."""
    key = (name or "overlap").strip().lower()
    if key not in CALCULATORS:
        raise ValidationError(f"Unknown payroll calculator: {name}")
    return CALCULATORS[key]()
