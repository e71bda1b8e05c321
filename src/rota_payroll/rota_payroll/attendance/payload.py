"""Ingestion boundary for attendance entries.

Upstream documents carry loosely typed, optional fields (camelCase keys,
ISO datetimes where dates are expected, ``HH:mm:ss`` clocks, empty strings
for absent ids). Everything is normalized here so the resolvers only ever
see ``AttendanceEntry`` values.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import format_clock, parse_clock, parse_iso_date
from ..common.validators import require_rate
from ..core.exceptions import ValidationError
from .model import AttendanceEntry

_FLAG_WORDS = {"true": True, "1": True, "false": False, "0": False}


def _optional_id(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, Mapping):
        value = value.get("_id")
    text = str(value or "").strip()
    return text or None


def parse_flag(value: Any, field_name: str = "bankHoliday") -> bool:
    """Accept real booleans, 0/1 and "true"/"false" strings; absent means False."""
    if value is None or value == "":
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in _FLAG_WORDS:
        return _FLAG_WORDS[value.strip().lower()]
    raise ValidationError(f"{field_name} must be true or false")


def parse_entry(payload: Mapping[str, Any]) -> AttendanceEntry:
    if not isinstance(payload, Mapping):
        raise ValidationError("attendanceList items must be objects")
    try:
        start_date = parse_iso_date(payload.get("startDate"))
    except ValueError:
        raise ValidationError(f"Invalid startDate: {payload.get('startDate')!r}")
    try:
        end_date = parse_iso_date(payload.get("endDate") or payload.get("startDate"))
    except ValueError:
        raise ValidationError(f"Invalid endDate: {payload.get('endDate')!r}")

    bank_holiday = parse_flag(payload.get("bankHoliday"))
    return AttendanceEntry(
        entry_id=_optional_id(payload.get("_id")),
        shift_id=_optional_id(payload.get("shiftId")),
        rate_profile_id=_optional_id(payload.get("employementRateId")),
        start_date=start_date,
        start_time=parse_clock(payload.get("startTime")),
        end_date=end_date,
        end_time=parse_clock(payload.get("endTime")),
        pay_rate=require_rate(payload.get("payRate")),
        note=str(payload.get("note") or ""),
        bank_holiday=bank_holiday,
        bank_holiday_id=_optional_id(payload.get("bankHolidayId")) if bank_holiday else None,
    )


def parse_entries(payloads: Iterable[Mapping[str, Any]]) -> list[AttendanceEntry]:
    if payloads is None:
        return []
    if not isinstance(payloads, (list, tuple)):
        raise ValidationError("attendanceList must be a list")
    return [parse_entry(p) for p in payloads]


def serialize_entry(entry: AttendanceEntry) -> dict:
    data = {
        "shiftId": entry.shift_id or "",
        "employementRateId": entry.rate_profile_id or "",
        "startDate": entry.start_date.isoformat(),
        "startTime": format_clock(entry.start_time),
        "endDate": entry.end_date.isoformat(),
        "endTime": format_clock(entry.end_time),
        "payRate": str(entry.pay_rate),
        "note": entry.note,
        "bankHoliday": entry.bank_holiday,
    }
    if entry.entry_id:
        data["_id"] = entry.entry_id
    if entry.bank_holiday_id:
        data["bankHolidayId"] = entry.bank_holiday_id
    return data
