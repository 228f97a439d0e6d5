from __future__ import annotations

from ..core.exceptions import ValidationError


def require_positive_int(value, field_name: str) -> int:
    # int(1.9) == 1, so fractional numbers must be refused before converting
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field_name} must be an integer")
    if isinstance(value, str) and not value.strip().isdigit():
        raise ValidationError(f"{field_name} must be an integer")
    try:
        n = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} must be an integer")
    if n <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return n
