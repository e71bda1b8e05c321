from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Mapping, Optional

from ..shifts.model import ShiftTemplate


@dataclass(frozen=True)
class WeeklyRateTable:
    """Hourly rate per weekday name (Monday..Sunday). Weekdays may be missing."""

    rates: Mapping[str, Decimal] = field(default_factory=dict)

    def rate_for(self, weekday: str) -> Optional[Decimal]:
        return self.rates.get(weekday)


@dataclass(frozen=True)
class RateProfile:
    """Domain entity: one shift family of an employee and its weekly rates."""

    profile_id: str
    employee_id: str
    shifts: tuple[ShiftTemplate, ...]
    rates: WeeklyRateTable
