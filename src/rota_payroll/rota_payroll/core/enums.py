from __future__ import annotations

from enum import Enum


class PayrollStatus(str, Enum):
    """Lifecycle state of a payroll record."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not PayrollStatus.PENDING
