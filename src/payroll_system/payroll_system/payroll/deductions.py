"""Applying deduction rules to a gross amount.

Pure functions: no I/O, no shared state. Percentages always apply to the
gross amount, never to what is left after earlier lines.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Tuple

from ..common.decimals import quantize_money
from ..core.enums import DeductionKind
from ..deductions.model import DeductionRule
from .model import DeductionLine


def apply_deduction(gross_pay: Decimal, rule: DeductionRule) -> DeductionLine:
    if rule.kind == DeductionKind.PERCENTAGE:
        amount = gross_pay * rule.value
    elif rule.kind == DeductionKind.FIXED:
        amount = rule.value
    else:
        raise ValueError(f"Unsupported deduction kind: {rule.kind!r}")

    return DeductionLine(
        name=rule.name,
        kind=rule.kind,
        value=rule.value,
        amount=quantize_money(amount),
    )


def apply_deductions(gross_pay: Decimal, rules: Iterable[DeductionRule]) -> Tuple[DeductionLine, ...]:
    # Keep the repository's order.
    return tuple(apply_deduction(gross_pay, rule) for rule in rules)


def total_of(lines: Iterable[DeductionLine]) -> Decimal:
    return sum((line.amount for line in lines), Decimal("0.00"))
