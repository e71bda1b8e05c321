from __future__ import annotations

from datetime import date
from decimal import Decimal

from src.rota_payroll.rota_payroll.payroll.aggregator import aggregate, aggregate_lines, round_totals
from src.rota_payroll.rota_payroll.payroll.calculator.standard_calculator import ElapsedTimeCalculator
from src.rota_payroll.rota_payroll.payroll.model import PayrollTotals
from src.rota_payroll.rota_payroll.payroll.overlap import overlap_minutes
from src.rota_payroll.rota_payroll.rates.resolver import RateProfileIndex, resolve_rate
from tests.fakes import make_entry, make_profile


def _entries():
    return [
        # Monday, day shift, clocked in an hour early.
        make_entry("08:00", "17:00", day=date(2025, 3, 3), shift_id="day"),
        # Tuesday night shift, an hour either side.
        make_entry("21:00", "07:00", day=date(2025, 3, 4), end_day=date(2025, 3, 5), shift_id="night"),
        # Wednesday bank holiday at a manual rate.
        make_entry(
            "09:00",
            "13:00",
            day=date(2025, 3, 5),
            shift_id="day",
            bank_holiday=True,
            bank_holiday_id="bh1",
            pay_rate=Decimal("30"),
        ),
        # No shift: elapsed time at the stored rate.
        make_entry("10:00", "11:30", day=date(2025, 3, 6), pay_rate=Decimal("10")),
    ]


def test_aggregate_totals():
    index = RateProfileIndex([make_profile()])

    totals = aggregate(_entries(), index.shift, index)

    assert totals.total_minutes == 480 + 480 + 240 + 90
    assert totals.total_amount == Decimal("351")


def test_aggregate_is_idempotent():
    index = RateProfileIndex([make_profile()])
    entries = _entries()

    assert aggregate(entries, index.shift, index) == aggregate(entries, index.shift, index)


def test_total_matches_sum_of_lines():
    profiles = [make_profile(Monday="12.37", Tuesday="15.11")]
    index = RateProfileIndex(profiles)
    entries = _entries() + [make_entry("09:07", "16:53", day=date(2025, 3, 10), shift_id="day")]

    totals = aggregate(entries, index.shift, profiles)
    expected = sum(
        (Decimal(overlap_minutes(e, index.shift(e.shift_id))) / 60) * resolve_rate(e, profiles) for e in entries
    )

    assert abs(totals.total_amount - expected) < Decimal("1e-9")


def test_stored_rates_used_when_not_resolving():
    index = RateProfileIndex([make_profile()])
    entry = make_entry("09:00", "17:00", shift_id="day", pay_rate=Decimal("5"))

    assert aggregate([entry], index.shift, index, resolve_rates=False).total_amount == Decimal("40")
    assert aggregate([entry], index.shift, index).total_amount == Decimal("96")


def test_bank_holiday_rate_never_overridden():
    index = RateProfileIndex([make_profile(Monday=20)])
    entry = make_entry("09:00", "17:00", shift_id="day", bank_holiday=True, pay_rate=Decimal("50"))

    assert aggregate([entry], index.shift, index).total_amount == Decimal("400")


def test_dangling_shift_pays_elapsed_time():
    index = RateProfileIndex([make_profile()])
    entry = make_entry("06:00", "18:00", shift_id="gone", pay_rate=Decimal("10"))

    lines = aggregate_lines([entry], index.shift, index)

    assert lines[0].shift is None
    assert lines[0].minutes == 720
    assert lines[0].amount == Decimal("120")


def test_empty_list():
    assert aggregate([], None, []) == PayrollTotals(total_minutes=0, total_amount=Decimal("0"))


def test_elapsed_calculator_ignores_shift_window():
    index = RateProfileIndex([make_profile()])
    entry = make_entry("08:00", "17:00", shift_id="day")

    totals = aggregate([entry], index.shift, index, calculator=ElapsedTimeCalculator())

    assert totals.total_minutes == 540


def test_round_totals_to_cents():
    totals = PayrollTotals(total_minutes=7, total_amount=Decimal("1.2345"))
    assert round_totals(totals).total_amount == Decimal("1.23")
    assert round_totals(PayrollTotals(1, Decimal("0.005"))).total_amount == Decimal("0.01")
