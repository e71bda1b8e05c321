from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class BankHoliday:
    holiday_id: str
    title: str
    date: date
