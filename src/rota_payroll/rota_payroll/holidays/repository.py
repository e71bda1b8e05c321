from __future__ import annotations

from typing import Protocol, Sequence

from .model import BankHoliday


class BankHolidayRepository(Protocol):
    def list_for_company_year(self, *, company_id: str, year: int) -> Sequence[BankHoliday]:
        raise NotImplementedError
