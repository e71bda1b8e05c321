from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class ShiftTemplate:
    """Domain entity: a named, day-independent shift window."""

    shift_id: str
    name: str
    start_clock: time
    end_clock: time

    @property
    def crosses_midnight(self) -> bool:
        return self.end_clock < self.start_clock
