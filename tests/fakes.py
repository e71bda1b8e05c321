from __future__ import annotations

from dataclasses import replace
from datetime import date, time
from decimal import Decimal
from typing import Optional

from src.rota_payroll.rota_payroll.attendance.model import AttendanceEntry
from src.rota_payroll.rota_payroll.core.enums import PayrollStatus
from src.rota_payroll.rota_payroll.holidays.model import BankHoliday
from src.rota_payroll.rota_payroll.payroll.model import PayrollRecord, PayrollTotals
from src.rota_payroll.rota_payroll.rates.model import RateProfile, WeeklyRateTable
from src.rota_payroll.rota_payroll.shifts.model import ShiftTemplate

DAY_SHIFT = ShiftTemplate(shift_id="day", name="Day", start_clock=time(9, 0), end_clock=time(17, 0))
NIGHT_SHIFT = ShiftTemplate(shift_id="night", name="Night", start_clock=time(22, 0), end_clock=time(6, 0))


def make_profile(profile_id: str = "p1", employee_id: str = "e1", shifts=(DAY_SHIFT, NIGHT_SHIFT), **rates) -> RateProfile:
    table = rates or {
        "Monday": Decimal("12"),
        "Tuesday": Decimal("15"),
        "Wednesday": Decimal("12"),
        "Thursday": Decimal("12"),
        "Friday": Decimal("12"),
        "Saturday": Decimal("18"),
    }
    return RateProfile(
        profile_id=profile_id,
        employee_id=employee_id,
        shifts=tuple(shifts),
        rates=WeeklyRateTable(rates={k: Decimal(str(v)) for k, v in table.items()}),
    )


def make_entry(start: str, end: str, *, day: date = date(2025, 3, 3), shift_id: Optional[str] = None, **kwargs) -> AttendanceEntry:
    sh, sm = (int(x) for x in start.split(":"))
    eh, em = (int(x) for x in end.split(":"))
    end_day = kwargs.pop("end_day", day)
    return AttendanceEntry(
        shift_id=shift_id,
        start_date=day,
        start_time=time(sh, sm),
        end_date=end_day,
        end_time=time(eh, em),
        **kwargs,
    )


class InMemoryPayrolls:
    def __init__(self):
        self._records: dict[str, PayrollRecord] = {}
        self._next_id = 0

    def get(self, record_id: str) -> Optional[PayrollRecord]:
        return self._records.get(str(record_id))

    def create(self, *, employee_id, company_id, from_date, to_date, attendance_list, totals) -> str:
        self._next_id += 1
        record_id = f"pr{self._next_id}"
        self._records[record_id] = PayrollRecord(
            record_id=record_id,
            employee_id=employee_id,
            company_id=company_id,
            from_date=from_date,
            to_date=to_date,
            attendance_list=tuple(attendance_list),
            totals=totals,
            status=PayrollStatus.PENDING,
        )
        return record_id

    def save(self, record: PayrollRecord, *, expected_status: PayrollStatus = PayrollStatus.PENDING) -> bool:
        stored = self._records.get(record.record_id)
        if not stored or stored.status != expected_status:
            return False
        self._records[record.record_id] = record
        return True

    def list_records(self, *, employee_id=None, status=None, period_start=None, period_end=None, limit=50, offset=0):
        items = list(self._records.values())
        if employee_id:
            items = [r for r in items if r.employee_id == employee_id]
        if status:
            items = [r for r in items if r.status == status]
        if period_start:
            items = [r for r in items if r.to_date >= period_start]
        if period_end:
            items = [r for r in items if r.from_date <= period_end]
        return items[offset : offset + limit]

    def force_status(self, record_id: str, status: PayrollStatus) -> None:
        self._records[record_id] = replace(self._records[record_id], status=status)


class InMemoryRateProfiles:
    def __init__(self, profiles_by_employee: dict[str, list[RateProfile]]):
        self._profiles = profiles_by_employee

    def list_for_employee(self, employee_id: str):
        return list(self._profiles.get(employee_id, []))


class InMemoryHolidays:
    def __init__(self, holidays_by_company: dict[str, list[BankHoliday]]):
        self._holidays = holidays_by_company

    def list_for_company_year(self, *, company_id: str, year: int):
        return [h for h in self._holidays.get(company_id, []) if h.date.year == year]


class FakeTimesheets:
    def __init__(self, entries_by_employee: dict[str, list[AttendanceEntry]]):
        self.entries_by_employee = entries_by_employee
        self.calls: list[dict] = []

    def fetch_attendance(self, *, employee_id: str, from_date: date, to_date: date):
        self.calls.append({"employee_id": employee_id, "from_date": from_date, "to_date": to_date})
        return [
            e
            for e in self.entries_by_employee.get(employee_id, [])
            if from_date <= e.start_date <= to_date
        ]
