"""Payroll record state machine.

pending -> approved | rejected. Both targets are terminal; nothing moves a
record back to pending. Every write path checks here before mutating.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from ..attendance.model import AttendanceEntry
from ..core.enums import PayrollStatus
from ..core.exceptions import RecordLockedError, ValidationError
from .model import PayrollRecord, PayrollTotals

ALLOWED_TRANSITIONS: dict[PayrollStatus, frozenset[PayrollStatus]] = {
    PayrollStatus.PENDING: frozenset({PayrollStatus.PENDING, PayrollStatus.APPROVED, PayrollStatus.REJECTED}),
    PayrollStatus.APPROVED: frozenset(),
    PayrollStatus.REJECTED: frozenset(),
}


def ensure_editable(record: PayrollRecord) -> None:
    if record.status is not PayrollStatus.PENDING:
        raise RecordLockedError(record.record_id, record.status.value)


def can_transition(current: PayrollStatus, target: PayrollStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def transition(record: PayrollRecord, target: PayrollStatus) -> PayrollRecord:
    ensure_editable(record)
    if not can_transition(record.status, target):
        raise ValidationError(f"Cannot move payroll from {record.status.value} to {target.value}")
    return replace(record, status=target)


def with_attendance(
    record: PayrollRecord,
    attendance_list: Iterable[AttendanceEntry],
    totals: PayrollTotals,
) -> PayrollRecord:
    """Replace entries and totals as one unit on a pending record."""
    ensure_editable(record)
    return replace(record, attendance_list=tuple(attendance_list), totals=totals)
