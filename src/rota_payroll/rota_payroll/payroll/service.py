from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..attendance.model import AttendanceEntry
from ..attendance.payload import parse_entries, parse_flag
from ..common.validators import require_non_empty, require_rate
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import PayrollStatus
from ..core.exceptions import NotFoundError, RecordLockedError, ValidationError
from ..holidays.model import BankHoliday
from ..holidays.service import BankHolidayService
from ..rates.model import RateProfile
from ..rates.repository import RateProfileRepository
from ..rates.resolver import (
    RateProfileIndex,
    apply_bank_holiday_toggle,
    apply_manual_rate,
    apply_shift_change,
    refresh_rate,
)
from ..timesheets.gateway import TimesheetGateway
from . import lifecycle
from .aggregator import aggregate_lines, round_totals, sum_lines
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import ShiftOverlapCalculator
from .model import PayrollLine, PayrollRecord, PayrollTotals
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayrollDetail:
    record: PayrollRecord
    lines: list[PayrollLine]
    profiles: Sequence[RateProfile]
    holidays: Sequence[BankHoliday]


class PayrollService:
    """Generate, edit, regenerate and decide payroll records.

    Every write recomputes both totals from the full attendance list and
    persists with a compare-and-write on ``status='pending'``.
    """

    def __init__(
        self,
        payrolls: PayrollRepository,
        rate_profiles: RateProfileRepository,
        holidays: BankHolidayService,
        timesheets: TimesheetGateway,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payrolls = payrolls
        self._rate_profiles = rate_profiles
        self._holidays = holidays
        self._timesheets = timesheets
        self._calculator = calculator or ShiftOverlapCalculator()

    # --- reads -----------------------------------------------------------

    def get(self, record_id: str) -> PayrollRecord:
        record = self._payrolls.get(str(record_id))
        if not record:
            raise NotFoundError(f"Payroll record {record_id} not found")
        return record

    def get_detail(self, record_id: str) -> PayrollDetail:
        record = self.get(record_id)
        index = self._index_for(record.employee_id)
        lines = aggregate_lines(
            record.attendance_list,
            index.shift,
            index,
            resolve_rates=False,
            calculator=self._calculator,
        )
        holidays = self._holidays.for_period(
            company_id=record.company_id,
            from_date=record.from_date,
            to_date=record.to_date,
        )
        return PayrollDetail(record=record, lines=lines, profiles=index.profiles, holidays=holidays)

    def list_records(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[PayrollStatus] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        page: int = 1,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[PayrollRecord]:
        period_start = period_end = None
        if year:
            if month:
                if not 1 <= int(month) <= 12:
                    raise ValidationError("month must be between 1 and 12")
                last_day = calendar.monthrange(int(year), int(month))[1]
                period_start = date(int(year), int(month), 1)
                period_end = date(int(year), int(month), last_day)
            else:
                period_start = date(int(year), 1, 1)
                period_end = date(int(year), 12, 31)

        page = max(int(page), 1)
        limit = max(int(limit), 1)
        return self._payrolls.list_records(
            employee_id=employee_id,
            status=status,
            period_start=period_start,
            period_end=period_end,
            limit=limit,
            offset=(page - 1) * limit,
        )

    # --- writes ----------------------------------------------------------

    def generate(
        self,
        *,
        employee_ids: Iterable[str],
        company_id: Optional[str],
        from_date: date,
        to_date: date,
    ) -> list[str]:
        """Create one pending record per employee from timesheet data."""
        ids = [require_non_empty(e, "userIds") for e in (employee_ids or [])]
        if not ids:
            raise ValidationError("Select at least one employee")
        if to_date < from_date:
            raise ValidationError("toDate must be on or after fromDate")

        created: list[str] = []
        for employee_id in ids:
            index = self._index_for(employee_id)
            entries = self._fetch_entries(employee_id, from_date, to_date, index)
            totals = self._totals(entries, index)
            record_id = self._payrolls.create(
                employee_id=employee_id,
                company_id=company_id,
                from_date=from_date,
                to_date=to_date,
                attendance_list=entries,
                totals=totals,
            )
            logger.info(
                "Generated payroll %s for employee %s (%s..%s, %d entries)",
                record_id,
                employee_id,
                from_date.isoformat(),
                to_date.isoformat(),
                len(entries),
            )
            created.append(record_id)
        return created

    def save(
        self,
        record_id: str,
        *,
        attendance_list: Iterable[Mapping[str, Any]],
        status: PayrollStatus = PayrollStatus.PENDING,
    ) -> PayrollRecord:
        """Replace the attendance list, recompute totals, optionally decide."""
        record = self.get(record_id)
        lifecycle.ensure_editable(record)

        entries = parse_entries(attendance_list)
        index = self._index_for(record.employee_id)
        entries = [refresh_rate(e, index) for e in entries]
        self._check_entries(record, entries, index)

        updated = lifecycle.with_attendance(record, entries, self._totals(entries, index))
        if status is not PayrollStatus.PENDING:
            updated = lifecycle.transition(updated, status)
        return self._commit(updated)

    def update_entry(self, record_id: str, position: int, changes: Mapping[str, Any]) -> PayrollRecord:
        """Apply one row edit through the explicit entry transitions."""
        record = self.get(record_id)
        lifecycle.ensure_editable(record)

        entries = list(record.attendance_list)
        if not 0 <= int(position) < len(entries):
            raise NotFoundError(f"Attendance entry {position} not found")

        index = self._index_for(record.employee_id)
        entry = entries[int(position)]
        if "shiftId" in changes:
            entry = apply_shift_change(entry, changes.get("shiftId") or None, index)
        if "bankHoliday" in changes:
            entry = apply_bank_holiday_toggle(
                entry,
                parse_flag(changes.get("bankHoliday")),
                index,
                bank_holiday_id=changes.get("bankHolidayId") or None,
            )
        elif "bankHolidayId" in changes and entry.bank_holiday:
            entry = apply_bank_holiday_toggle(entry, True, index, bank_holiday_id=changes.get("bankHolidayId") or None)
        if "payRate" in changes:
            entry = apply_manual_rate(entry, require_rate(changes.get("payRate")))
        if "note" in changes:
            entry = replace(entry, note=str(changes.get("note") or ""))
        entries[int(position)] = entry

        self._check_entries(record, [entry], index)
        updated = lifecycle.with_attendance(record, entries, self._totals(entries, index))
        return self._commit(updated)

    def approve(self, record_id: str) -> PayrollRecord:
        record = self.get(record_id)
        lifecycle.ensure_editable(record)
        index = self._index_for(record.employee_id)
        entries = list(record.attendance_list)
        updated = lifecycle.with_attendance(record, entries, self._totals(entries, index))
        return self._commit(lifecycle.transition(updated, PayrollStatus.APPROVED))

    def reject(self, record_id: str) -> PayrollRecord:
        record = self.get(record_id)
        return self._commit(lifecycle.transition(record, PayrollStatus.REJECTED))

    def regenerate(self, record_id: str) -> PayrollRecord:
        """Discard the attendance list, re-fetch it and re-aggregate."""
        record = self.get(record_id)
        lifecycle.ensure_editable(record)

        index = self._index_for(record.employee_id)
        entries = self._fetch_entries(record.employee_id, record.from_date, record.to_date, index)
        updated = lifecycle.with_attendance(record, entries, self._totals(entries, index))
        logger.info("Regenerated payroll %s (%d entries)", record.record_id, len(entries))
        return self._commit(updated)

    # --- helpers ---------------------------------------------------------

    def _index_for(self, employee_id: str) -> RateProfileIndex:
        return RateProfileIndex(self._rate_profiles.list_for_employee(employee_id))

    def _fetch_entries(
        self, employee_id: str, from_date: date, to_date: date, index: RateProfileIndex
    ) -> list[AttendanceEntry]:
        fetched = self._timesheets.fetch_attendance(employee_id=employee_id, from_date=from_date, to_date=to_date)
        return [refresh_rate(e, index) for e in fetched]

    def _totals(self, entries: Sequence[AttendanceEntry], index: RateProfileIndex) -> PayrollTotals:
        # Rates were refreshed onto the entries; bank holiday overrides stay as stored.
        lines = aggregate_lines(entries, index.shift, index, resolve_rates=False, calculator=self._calculator)
        return round_totals(sum_lines(lines))

    def _check_entries(self, record: PayrollRecord, entries: Sequence[AttendanceEntry], index: RateProfileIndex) -> None:
        for entry in entries:
            if entry.shift_id and entry.shift_id not in index:
                logger.warning(
                    "Payroll %s: shift %s is not owned by employee %s; paying elapsed time",
                    record.record_id,
                    entry.shift_id,
                    record.employee_id,
                )
            if entry.end_date < entry.start_date:
                raise ValidationError("endDate must be on or after startDate")

        if record.company_id:
            holidays = self._holidays.for_period(
                company_id=record.company_id,
                from_date=min([record.from_date] + [e.start_date for e in entries]),
                to_date=max([record.to_date] + [e.start_date for e in entries]),
            )
            BankHolidayService.validate_selection(entries, holidays)

    def _commit(self, record: PayrollRecord) -> PayrollRecord:
        if not self._payrolls.save(record, expected_status=PayrollStatus.PENDING):
            current = self._payrolls.get(record.record_id)
            status = current.status.value if current else "missing"
            raise RecordLockedError(record.record_id, status)
        logger.info(
            "Saved payroll %s status=%s minutes=%d amount=%s",
            record.record_id,
            record.status.value,
            record.total_minutes,
            record.total_amount,
        )
        return record
