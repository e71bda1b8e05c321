from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..attendance.model import AttendanceEntry
from ..core.enums import PayrollStatus
from .model import PayrollRecord, PayrollTotals


class PayrollRepository(Protocol):
    def get(self, record_id: str) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: str,
        company_id: Optional[str],
        from_date: date,
        to_date: date,
        attendance_list: Sequence[AttendanceEntry],
        totals: PayrollTotals,
    ) -> str:
        """Insert a pending record. Returns its id."""

        raise NotImplementedError

    def save(self, record: PayrollRecord, *, expected_status: PayrollStatus = PayrollStatus.PENDING) -> bool:
        """Compare-and-write of entries, totals and status.

        Returns False when the stored status is no longer ``expected_status``.
        """

        raise NotImplementedError

    def list_records(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[PayrollStatus] = None,
        period_start: Optional[date] = None,
        period_end: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[PayrollRecord]:
        raise NotImplementedError
