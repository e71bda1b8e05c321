"""Rate resolution for attendance entries.

A shift id uniquely identifies its owning rate profile among one employee's
profiles, so owner lookup goes through ``RateProfileIndex`` instead of
scanning every profile's shift list per entry.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Optional, Union

from ..attendance.model import AttendanceEntry
from ..common.datetime_utils import weekday_name
from ..core.exceptions import ValidationError
from ..shifts.model import ShiftTemplate
from .model import RateProfile

logger = logging.getLogger(__name__)


class RateProfileIndex:
    """``shift_id -> RateProfile`` index over one employee's profiles."""

    def __init__(self, profiles: Iterable[RateProfile]):
        self._profiles: tuple[RateProfile, ...] = tuple(profiles)
        self._by_shift: dict[str, RateProfile] = {}
        self._shifts: dict[str, ShiftTemplate] = {}
        for profile in self._profiles:
            for shift in profile.shifts:
                # First owner wins if upstream data ever repeats an id.
                self._by_shift.setdefault(shift.shift_id, profile)
                self._shifts.setdefault(shift.shift_id, shift)

    @property
    def profiles(self) -> tuple[RateProfile, ...]:
        return self._profiles

    def owner_of(self, shift_id: Optional[str]) -> Optional[RateProfile]:
        if not shift_id:
            return None
        return self._by_shift.get(shift_id)

    def shift(self, shift_id: Optional[str]) -> Optional[ShiftTemplate]:
        if not shift_id:
            return None
        return self._shifts.get(shift_id)

    def __contains__(self, shift_id: object) -> bool:
        return shift_id in self._shifts


ProfileSource = Union[RateProfileIndex, Iterable[RateProfile]]


def as_index(profiles: ProfileSource) -> RateProfileIndex:
    if isinstance(profiles, RateProfileIndex):
        return profiles
    return RateProfileIndex(profiles)


def weekday_rate(profile: RateProfile, entry: AttendanceEntry) -> Decimal:
    """Table rate for the weekday of ``entry.start_date``; 0 when unset."""
    weekday = weekday_name(entry.start_date)
    rate = profile.rates.rate_for(weekday)
    if rate is None:
        logger.warning(
            "No %s rate in profile %s; entry on %s resolves to 0",
            weekday,
            profile.profile_id,
            entry.start_date.isoformat(),
        )
        return Decimal("0")
    return rate


def resolve_rate(entry: AttendanceEntry, owner_profiles: ProfileSource) -> Decimal:
    """Hourly rate applicable to ``entry``.

    Bank-holiday entries keep their manual rate. Entries without an owning
    profile keep their stored rate; nothing is fabricated without shift
    context.
    """
    if entry.bank_holiday:
        return entry.pay_rate

    owner = as_index(owner_profiles).owner_of(entry.shift_id)
    if owner is None:
        return entry.pay_rate
    return weekday_rate(owner, entry)


def refresh_rate(entry: AttendanceEntry, owner_profiles: ProfileSource) -> AttendanceEntry:
    """Write the resolved rate (and owning profile id) back onto the entry."""
    index = as_index(owner_profiles)
    owner = index.owner_of(entry.shift_id)
    if owner is None:
        return entry
    if entry.bank_holiday:
        return replace(entry, rate_profile_id=owner.profile_id)
    return replace(entry, rate_profile_id=owner.profile_id, pay_rate=weekday_rate(owner, entry))


def apply_shift_change(entry: AttendanceEntry, new_shift_id: Optional[str], owner_profiles: ProfileSource) -> AttendanceEntry:
    return refresh_rate(replace(entry, shift_id=new_shift_id or None), owner_profiles)


def apply_bank_holiday_toggle(
    entry: AttendanceEntry,
    new_value: bool,
    owner_profiles: ProfileSource,
    *,
    bank_holiday_id: Optional[str] = None,
) -> AttendanceEntry:
    """Toggle the bank-holiday flag.

    Switching on keeps the current rate as the starting override. Switching
    off clears the override and the holiday reference, then re-resolves.
    """
    if new_value:
        return replace(entry, bank_holiday=True, bank_holiday_id=bank_holiday_id or entry.bank_holiday_id)
    cleared = replace(entry, bank_holiday=False, bank_holiday_id=None)
    return refresh_rate(cleared, owner_profiles)


def apply_manual_rate(entry: AttendanceEntry, rate: Decimal) -> AttendanceEntry:
    if not entry.bank_holiday:
        raise ValidationError("payRate can only be overridden on bank holiday entries")
    if rate < 0:
        raise ValidationError("payRate must be a non-negative number")
    return replace(entry, pay_rate=rate)
