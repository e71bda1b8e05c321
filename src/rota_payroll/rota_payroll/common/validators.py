from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_rate(value: Any, field_name: str = "payRate") -> Decimal:
    """Coerce a rate to a non-negative Decimal. Empty values count as 0."""
    if value is None or value == "":
        return Decimal("0")
    try:
        rate = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
    if not rate.is_finite() or rate < 0:
        raise ValidationError(f"{field_name} must be a non-negative number")
    return rate
