from __future__ import annotations

from typing import Protocol, Sequence

from .model import RateProfile


class RateProfileRepository(Protocol):
    def list_for_employee(self, employee_id: str) -> Sequence[RateProfile]:
        raise NotImplementedError
