from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..attendance.model import AttendanceEntry
from ..core.enums import PayrollStatus
from ..shifts.model import ShiftTemplate


@dataclass(frozen=True)
class PayrollTotals:
    """Minutes and amount for a record; always written together."""

    total_minutes: int = 0
    total_amount: Decimal = Decimal("0")


@dataclass(frozen=True)
class PayrollLine:
    """Read-model: one attendance entry with its paid minutes and cost."""

    entry: AttendanceEntry
    shift: Optional[ShiftTemplate]
    minutes: int
    rate: Decimal
    amount: Decimal


@dataclass(frozen=True)
class PayrollRecord:
    """Domain entity: lifecycle-gated payroll totals for one pay period."""

    record_id: str
    employee_id: str
    company_id: Optional[str]
    from_date: date
    to_date: date
    attendance_list: tuple[AttendanceEntry, ...]
    totals: PayrollTotals
    status: PayrollStatus = PayrollStatus.PENDING

    @property
    def total_minutes(self) -> int:
        return self.totals.total_minutes

    @property
    def total_amount(self) -> Decimal:
        return self.totals.total_amount
