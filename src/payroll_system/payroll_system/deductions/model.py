from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import DeductionKind


@dataclass(frozen=True)
class DeductionRule:
    """Domain entity: a configured deduction.

    ``value`` is a fraction (0.15 == 15%) for PERCENTAGE rules and a currency
    amount for FIXED rules.
    """

    rule_id: int
    name: str
    kind: DeductionKind
    value: Decimal
    is_active: bool = True
    description: Optional[str] = None
