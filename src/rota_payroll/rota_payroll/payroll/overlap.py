"""Paid-minute computation for attendance windows against shift templates.

Both windows are day-free clock intervals. Each is normalized on its own
(``end += 1440`` when ``end < start``), which places it on a day-zero axis.
Two independently normalized windows can still be a day out of phase: an
attendance entry for the 05:00-06:00 tail of a 22:00-06:00 shift lands on
day zero while the shift's tail lands on day one. The overlap is therefore
the best of three alignments: as normalized, shift moved one day forward,
attendance moved one day forward.
"""

from __future__ import annotations

from datetime import time
from typing import Optional

from ..attendance.model import AttendanceEntry
from ..common.datetime_utils import clock_to_minutes
from ..core.constants import MINUTES_PER_DAY
from ..shifts.model import ShiftTemplate

Interval = tuple[int, int]


def to_interval(start: time, end: time) -> Interval:
    """Minute offsets from day-zero midnight; a midnight crossing pushes end past 1440."""
    start_m = clock_to_minutes(start)
    end_m = clock_to_minutes(end)
    if end_m < start_m:
        end_m += MINUTES_PER_DAY
    return start_m, end_m


def interval_overlap(a: Interval, b: Interval) -> int:
    return max(0, min(a[1], b[1]) - max(a[0], b[0]))


def _shifted(interval: Interval, minutes: int) -> Interval:
    return interval[0] + minutes, interval[1] + minutes


def elapsed_minutes(entry: AttendanceEntry) -> int:
    start, end = to_interval(entry.start_time, entry.end_time)
    return end - start


def overlap_minutes(entry: AttendanceEntry, shift: Optional[ShiftTemplate]) -> int:
    """Minutes of ``entry`` that fall inside ``shift``.

    Without a shift the whole elapsed window counts.
    """
    if shift is None:
        return elapsed_minutes(entry)

    attendance = to_interval(entry.start_time, entry.end_time)
    window = to_interval(shift.start_clock, shift.end_clock)
    return max(
        interval_overlap(attendance, window),
        interval_overlap(attendance, _shifted(window, MINUTES_PER_DAY)),
        interval_overlap(_shifted(attendance, MINUTES_PER_DAY), window),
    )
