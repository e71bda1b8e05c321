from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any, Optional

from ..core.constants import MINUTES_PER_HOUR, WEEKDAYS

logger = logging.getLogger(__name__)


def parse_iso_date(value: Any) -> date:
    """Parse YYYY-MM-DD (or an ISO datetime prefix) into date.

    Raises ValueError when the value is not a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    return datetime.strptime(text[:10], "%Y-%m-%d").date()


def parse_clock(value: Any) -> time:
    """Parse an HH:mm clock value, tolerating seconds and partial input.

    Missing or malformed values normalize to 00:00 so a single bad entry
    never aborts a whole payroll computation.
    """
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)

    parts = str(value or "").strip().split(":")
    if len(parts) < 2:
        if value:
            logger.debug("Unparseable clock value %r, using 00:00", value)
        return time(0, 0)
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
        return time(hour=hours, minute=minutes)
    except ValueError:
        logger.debug("Unparseable clock value %r, using 00:00", value)
        return time(0, 0)


def clock_to_minutes(value: time) -> int:
    return value.hour * MINUTES_PER_HOUR + value.minute


def format_clock(value: Optional[time]) -> str:
    if value is None:
        return "00:00"
    return f"{value.hour:02d}:{value.minute:02d}"


def format_minutes(minutes: int) -> str:
    """Render a minute count as HH:MM for display."""
    return f"{minutes // MINUTES_PER_HOUR:02d}:{minutes % MINUTES_PER_HOUR:02d}"


def weekday_name(value: date) -> str:
    return WEEKDAYS[value.weekday()]
