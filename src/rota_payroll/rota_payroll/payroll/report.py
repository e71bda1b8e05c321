from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..attendance.payload import serialize_entry
from ..common.datetime_utils import format_clock, format_minutes
from ..core.constants import DEFAULT_CURRENCY
from .model import PayrollLine, PayrollRecord

_CENTS = Decimal("0.01")


def _money(value: Decimal) -> float:
    return float(value.quantize(_CENTS, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


class PayrollReportService:
    """Shapes payroll records and lines for the JSON API and payslip views.

    Rounding happens only here, at the display boundary.
    """

    def __init__(self, *, currency: str = DEFAULT_CURRENCY):
        self._currency = currency

    def serialize_record(self, record: PayrollRecord) -> dict:
        return {
            "_id": record.record_id,
            "userId": record.employee_id,
            "companyId": record.company_id,
            "fromDate": record.from_date.isoformat(),
            "toDate": record.to_date.isoformat(),
            "attendanceList": [serialize_entry(e) for e in record.attendance_list],
            "totalHour": record.total_minutes,
            "totalAmount": _money(record.total_amount),
            "status": record.status.value,
        }

    def build_payslip(self, record: PayrollRecord, lines: Iterable[PayrollLine]) -> ReportData:
        rows: list[dict] = []
        total_minutes = 0
        total_amount = Decimal("0")
        bank_holiday_minutes = 0

        for line in lines:
            entry = line.entry
            total_minutes += line.minutes
            total_amount += line.amount
            if entry.bank_holiday:
                bank_holiday_minutes += line.minutes

            rows.append(
                {
                    "start_date": entry.start_date.strftime("%Y-%m-%d"),
                    "end_date": entry.end_date.strftime("%Y-%m-%d"),
                    "start_time": format_clock(entry.start_time),
                    "end_time": format_clock(entry.end_time),
                    "shift_name": line.shift.name if line.shift else "-",
                    "shift_schedule": (
                        f"{format_clock(line.shift.start_clock)} - {format_clock(line.shift.end_clock)}"
                        if line.shift
                        else ""
                    ),
                    "duration": format_minutes(line.minutes),
                    "minutes": line.minutes,
                    "pay_rate": _money(line.rate),
                    "line_total": _money(line.amount),
                    "bank_holiday": entry.bank_holiday,
                    "note": entry.note or "",
                }
            )

        summary = {
            "payroll_id": record.record_id,
            "employee_id": record.employee_id,
            "period": f"{record.from_date.strftime('%d %b')} - {record.to_date.strftime('%d %b %Y')}",
            "status": record.status.value,
            "currency": self._currency,
            "total_hours": format_minutes(total_minutes),
            "total_minutes": total_minutes,
            "bank_holiday_hours": format_minutes(bank_holiday_minutes),
            "total_amount": _money(total_amount),
        }
        return ReportData(rows=rows, summary=summary)
