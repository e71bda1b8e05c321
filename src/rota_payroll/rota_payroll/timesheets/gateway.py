from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..attendance.model import AttendanceEntry


class TimesheetGateway(Protocol):
    """Source of attendance entries for a pay period (timesheets + rota)."""

    def fetch_attendance(self, *, employee_id: str, from_date: date, to_date: date) -> Sequence[AttendanceEntry]:
        """Entries in chronological order. Rates are resolved by the caller."""

        raise NotImplementedError
