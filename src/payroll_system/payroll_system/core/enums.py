from __future__ import annotations

from enum import Enum


class DeductionKind(str, Enum):
    """How a deduction rule's value is interpreted."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"
