from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.rota_payroll.rota_payroll.core.exceptions import ValidationError
from src.rota_payroll.rota_payroll.rates.resolver import (
    RateProfileIndex,
    apply_bank_holiday_toggle,
    apply_manual_rate,
    apply_shift_change,
    refresh_rate,
    resolve_rate,
)
from src.rota_payroll.rota_payroll.shifts.model import ShiftTemplate
from tests.fakes import DAY_SHIFT, make_entry, make_profile

MONDAY = date(2025, 3, 3)
SUNDAY = date(2025, 3, 9)


def test_weekday_lookup_uses_start_date():
    profile = make_profile(Monday=20, Tuesday=25)
    entry = make_entry("22:00", "06:00", day=MONDAY, end_day=date(2025, 3, 4), shift_id="night")
    assert resolve_rate(entry, [profile]) == Decimal("20")


def test_bank_holiday_override_is_preserved():
    profile = make_profile(Monday=20)
    entry = make_entry("09:00", "17:00", shift_id="day", bank_holiday=True, pay_rate=Decimal("50"))
    assert resolve_rate(entry, [profile]) == Decimal("50")


def test_missing_weekday_rate_resolves_to_zero():
    profile = make_profile(Monday=20)
    entry = make_entry("09:00", "17:00", day=SUNDAY, shift_id="day", pay_rate=Decimal("9"))
    assert resolve_rate(entry, [profile]) == Decimal("0")


def test_no_owner_keeps_stored_rate():
    entry = make_entry("09:00", "17:00", shift_id="unknown", pay_rate=Decimal("11.5"))
    assert resolve_rate(entry, [make_profile()]) == Decimal("11.5")


def test_no_shift_keeps_stored_rate():
    entry = make_entry("09:00", "17:00", pay_rate=Decimal("7"))
    assert resolve_rate(entry, [make_profile()]) == Decimal("7")


def test_owner_is_found_across_profiles():
    weekend = ShiftTemplate(shift_id="wk", name="Weekend", start_clock=DAY_SHIFT.start_clock, end_clock=DAY_SHIFT.end_clock)
    main = make_profile("p1", Monday=10)
    extra = make_profile("p2", shifts=(weekend,), Monday=30)
    index = RateProfileIndex([main, extra])

    assert index.owner_of("wk").profile_id == "p2"
    assert index.owner_of("day").profile_id == "p1"
    assert index.owner_of(None) is None
    assert resolve_rate(make_entry("09:00", "10:00", shift_id="wk"), index) == Decimal("30")


def test_refresh_rate_records_owner_and_rate():
    entry = make_entry("09:00", "17:00", shift_id="day", pay_rate=Decimal("1"))
    refreshed = refresh_rate(entry, [make_profile(Monday=14)])
    assert refreshed.pay_rate == Decimal("14")
    assert refreshed.rate_profile_id == "p1"


def test_shift_change_refreshes_rate():
    profile_a = make_profile("pa", shifts=(DAY_SHIFT,), Monday=10)
    other = ShiftTemplate(shift_id="other", name="Other", start_clock=DAY_SHIFT.start_clock, end_clock=DAY_SHIFT.end_clock)
    profile_b = make_profile("pb", shifts=(other,), Monday=16)
    index = RateProfileIndex([profile_a, profile_b])

    entry = refresh_rate(make_entry("09:00", "17:00", shift_id="day"), index)
    changed = apply_shift_change(entry, "other", index)

    assert changed.shift_id == "other"
    assert changed.rate_profile_id == "pb"
    assert changed.pay_rate == Decimal("16")


def test_shift_change_keeps_bank_holiday_rate():
    entry = make_entry("09:00", "17:00", shift_id="day", bank_holiday=True, pay_rate=Decimal("40"))
    changed = apply_shift_change(entry, "night", [make_profile(Monday=10)])
    assert changed.pay_rate == Decimal("40")


def test_bank_holiday_toggle_off_clears_override():
    index = RateProfileIndex([make_profile(Monday=20)])
    entry = make_entry(
        "09:00",
        "17:00",
        shift_id="day",
        bank_holiday=True,
        bank_holiday_id="bh1",
        pay_rate=Decimal("50"),
    )

    cleared = apply_bank_holiday_toggle(entry, False, index)

    assert cleared.bank_holiday is False
    assert cleared.bank_holiday_id is None
    assert cleared.pay_rate == Decimal("20")


def test_bank_holiday_toggle_on_keeps_rate_as_starting_override():
    index = RateProfileIndex([make_profile(Monday=20)])
    entry = refresh_rate(make_entry("09:00", "17:00", shift_id="day"), index)

    flagged = apply_bank_holiday_toggle(entry, True, index, bank_holiday_id="bh1")

    assert flagged.bank_holiday is True
    assert flagged.bank_holiday_id == "bh1"
    assert flagged.pay_rate == Decimal("20")


def test_manual_rate_only_on_bank_holidays():
    entry = make_entry("09:00", "17:00", shift_id="day")
    with pytest.raises(ValidationError):
        apply_manual_rate(entry, Decimal("30"))

    holiday = make_entry("09:00", "17:00", shift_id="day", bank_holiday=True)
    assert apply_manual_rate(holiday, Decimal("30")).pay_rate == Decimal("30")
