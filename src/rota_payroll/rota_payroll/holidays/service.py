from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceEntry
from ..core.exceptions import ValidationError
from .model import BankHoliday
from .repository import BankHolidayRepository


class BankHolidayService:
    """Read access to the bank holiday registry for payroll periods."""

    def __init__(self, holidays: BankHolidayRepository):
        self._holidays = holidays

    def for_period(self, *, company_id: Optional[str], from_date: date, to_date: date) -> list[BankHoliday]:
        """Holidays of every calendar year the period touches, in date order."""
        if not company_id:
            return []
        out: list[BankHoliday] = []
        for year in range(from_date.year, to_date.year + 1):
            out.extend(self._holidays.list_for_company_year(company_id=company_id, year=year))
        out.sort(key=lambda h: h.date)
        return out

    @staticmethod
    def options_for(entry: AttendanceEntry, holidays: Iterable[BankHoliday]) -> list[BankHoliday]:
        """Holidays selectable for an entry: those in the entry's start year."""
        return [h for h in holidays if h.date.year == entry.start_date.year]

    @staticmethod
    def validate_selection(entries: Sequence[AttendanceEntry], holidays: Sequence[BankHoliday]) -> None:
        """Reject bank holiday references that are not in the registry."""
        known = {h.holiday_id for h in holidays}
        for entry in entries:
            if entry.bank_holiday and entry.bank_holiday_id and entry.bank_holiday_id not in known:
                raise ValidationError(f"Unknown bank holiday: {entry.bank_holiday_id}")
