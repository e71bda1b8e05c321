class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class RecordLockedError(DomainError):
    """Raised when a payroll record is no longer pending and cannot change."""

    def __init__(self, record_id: str, status: str):
        super().__init__(f"Payroll record {record_id} is locked (status={status})")
        self.record_id = record_id
        self.status = status
