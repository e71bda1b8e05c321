from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.rota_payroll.rota_payroll.core.enums import PayrollStatus
from src.rota_payroll.rota_payroll.core.exceptions import RecordLockedError
from src.rota_payroll.rota_payroll.payroll import lifecycle
from src.rota_payroll.rota_payroll.payroll.model import PayrollRecord, PayrollTotals
from tests.fakes import make_entry


def _record(status: PayrollStatus = PayrollStatus.PENDING) -> PayrollRecord:
    return PayrollRecord(
        record_id="pr1",
        employee_id="e1",
        company_id="c1",
        from_date=date(2025, 3, 1),
        to_date=date(2025, 3, 31),
        attendance_list=(make_entry("09:00", "17:00"),),
        totals=PayrollTotals(total_minutes=480, total_amount=Decimal("96.00")),
        status=status,
    )


@pytest.mark.parametrize("target", [PayrollStatus.APPROVED, PayrollStatus.REJECTED, PayrollStatus.PENDING])
def test_pending_can_move_to_any_state(target):
    assert lifecycle.transition(_record(), target).status is target


@pytest.mark.parametrize("current", [PayrollStatus.APPROVED, PayrollStatus.REJECTED])
@pytest.mark.parametrize("target", [PayrollStatus.APPROVED, PayrollStatus.REJECTED, PayrollStatus.PENDING])
def test_terminal_states_are_locked(current, target):
    with pytest.raises(RecordLockedError):
        lifecycle.transition(_record(current), target)


def test_with_attendance_replaces_entries_and_totals_together():
    updated = lifecycle.with_attendance(_record(), [], PayrollTotals(0, Decimal("0")))
    assert updated.attendance_list == ()
    assert updated.total_minutes == 0
    assert updated.total_amount == Decimal("0")


def test_with_attendance_refused_on_approved_record():
    record = _record(PayrollStatus.APPROVED)
    with pytest.raises(RecordLockedError) as exc:
        lifecycle.with_attendance(record, [], PayrollTotals(0, Decimal("0")))
    assert exc.value.status == "approved"
    assert record.total_minutes == 480


def test_terminal_flags():
    assert not PayrollStatus.PENDING.is_terminal
    assert PayrollStatus.APPROVED.is_terminal
    assert PayrollStatus.REJECTED.is_terminal
