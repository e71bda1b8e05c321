from datetime import date, time

import pytest

from src.rota_payroll.rota_payroll.payroll.overlap import elapsed_minutes, interval_overlap, overlap_minutes, to_interval
from src.rota_payroll.rota_payroll.shifts.model import ShiftTemplate
from tests.fakes import DAY_SHIFT, NIGHT_SHIFT, make_entry


def test_same_day_overlap():
    assert overlap_minutes(make_entry("10:00", "12:00"), DAY_SHIFT) == 120


def test_attendance_outside_day_shift():
    assert overlap_minutes(make_entry("18:00", "19:00"), DAY_SHIFT) == 0


def test_overnight_shift_contains_overnight_attendance():
    assert overlap_minutes(make_entry("23:00", "05:00"), NIGHT_SHIFT) == 360


def test_tail_of_overnight_shift_counts():
    # 05:00-06:00 sits a day after the shift's 22:00 start on the normalized axis.
    assert overlap_minutes(make_entry("05:00", "06:00"), NIGHT_SHIFT) == 60


def test_no_shift_falls_back_to_elapsed_time():
    assert overlap_minutes(make_entry("08:00", "16:30"), None) == 510


def test_attendance_longer_than_night_shift_is_clipped():
    assert overlap_minutes(make_entry("21:30", "06:15"), NIGHT_SHIFT) == 480


def test_overnight_attendance_against_day_shift():
    assert overlap_minutes(make_entry("16:00", "02:00"), DAY_SHIFT) == 60


def test_morning_attendance_does_not_touch_night_shift():
    assert overlap_minutes(make_entry("08:00", "10:00"), NIGHT_SHIFT) == 0


def test_early_evening_start_of_night_shift():
    assert overlap_minutes(make_entry("22:00", "23:30"), NIGHT_SHIFT) == 90


def test_both_windows_identical_overnight():
    assert overlap_minutes(make_entry("22:00", "06:00"), NIGHT_SHIFT) == 480


@pytest.mark.parametrize(
    "start,end,expected",
    [
        ("22:00", "06:00", 480),
        ("09:00", "09:00", 0),
        ("00:00", "23:59", 1439),
        ("23:45", "00:15", 30),
    ],
)
def test_elapsed_minutes_wraps_midnight(start, end, expected):
    assert elapsed_minutes(make_entry(start, end)) == expected


def test_dates_do_not_change_clock_arithmetic():
    entry = make_entry("23:00", "05:00", day=date(2025, 3, 3), end_day=date(2025, 3, 4))
    assert overlap_minutes(entry, NIGHT_SHIFT) == 360


def test_overlap_is_never_negative():
    shift = ShiftTemplate(shift_id="s", name="Late", start_clock=time(14, 0), end_clock=time(15, 0))
    assert overlap_minutes(make_entry("15:30", "16:00"), shift) == 0


def test_interval_helpers():
    assert to_interval(time(22, 0), time(6, 0)) == (1320, 1800)
    assert interval_overlap((0, 100), (50, 200)) == 50
    assert interval_overlap((0, 10), (20, 30)) == 0
