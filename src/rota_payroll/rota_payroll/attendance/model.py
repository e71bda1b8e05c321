from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class AttendanceEntry:
    """Domain entity: one logged worked window, optionally tied to a shift.

    When ``bank_holiday`` is false ``pay_rate`` is derived from the owning
    rate profile; when true it is a manual override chosen by the preparer.
    """

    start_date: date
    start_time: time
    end_date: date
    end_time: time
    pay_rate: Decimal = Decimal("0")
    note: str = ""
    bank_holiday: bool = False
    bank_holiday_id: Optional[str] = None
    shift_id: Optional[str] = None
    rate_profile_id: Optional[str] = None
    entry_id: Optional[str] = None
