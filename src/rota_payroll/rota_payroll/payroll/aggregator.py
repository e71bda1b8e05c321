"""Reduction of attendance entries into payroll totals.

Pure and deterministic: no hidden state, no clock reads. Totals are built
completely before being returned, so callers never observe partial sums.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, Optional

from ..attendance.model import AttendanceEntry
from ..core.constants import MINUTES_PER_HOUR
from ..rates.resolver import ProfileSource, as_index, resolve_rate
from ..shifts.model import ShiftTemplate
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import ShiftOverlapCalculator
from .model import PayrollLine, PayrollTotals

ShiftLookup = Callable[[Optional[str]], Optional[ShiftTemplate]]

MONEY = Decimal("0.01")


def line_amount(minutes: int, rate: Decimal) -> Decimal:
    return Decimal(minutes) * rate / MINUTES_PER_HOUR


def aggregate_lines(
    attendance_list: Iterable[AttendanceEntry],
    shift_lookup: Optional[ShiftLookup],
    profiles: ProfileSource,
    *,
    resolve_rates: bool = True,
    calculator: Optional[PayrollCalculator] = None,
) -> list[PayrollLine]:
    """Per-entry breakdown in input order.

    With ``resolve_rates=False`` the stored ``pay_rate`` is used as-is, for
    callers that already refreshed rates on the entries.
    """
    index = as_index(profiles)
    lookup = shift_lookup or index.shift
    calc = calculator or ShiftOverlapCalculator()

    lines: list[PayrollLine] = []
    for entry in attendance_list:
        shift = lookup(entry.shift_id)
        minutes = calc.worked_minutes(entry, shift)
        rate = resolve_rate(entry, index) if resolve_rates else entry.pay_rate
        lines.append(
            PayrollLine(
                entry=entry,
                shift=shift,
                minutes=minutes,
                rate=rate,
                amount=line_amount(minutes, rate),
            )
        )
    return lines


def sum_lines(lines: Iterable[PayrollLine]) -> PayrollTotals:
    total_minutes = 0
    total_amount = Decimal("0")
    for line in lines:
        total_minutes += line.minutes
        total_amount += line.amount
    return PayrollTotals(total_minutes=total_minutes, total_amount=total_amount)


def aggregate(
    attendance_list: Iterable[AttendanceEntry],
    shift_lookup: Optional[ShiftLookup],
    profiles: ProfileSource,
    *,
    resolve_rates: bool = True,
    calculator: Optional[PayrollCalculator] = None,
) -> PayrollTotals:
    lines = aggregate_lines(
        attendance_list,
        shift_lookup,
        profiles,
        resolve_rates=resolve_rates,
        calculator=calculator,
    )
    return sum_lines(lines)


def round_totals(totals: PayrollTotals) -> PayrollTotals:
    """Round the amount to currency precision for storage."""
    return PayrollTotals(
        total_minutes=totals.total_minutes,
        total_amount=totals.total_amount.quantize(MONEY, rounding=ROUND_HALF_UP),
    )
