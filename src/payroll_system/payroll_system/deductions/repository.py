from __future__ import annotations

from typing import Protocol, Sequence

from .model import DeductionRule


class DeductionRuleRepository(Protocol):
    def list_active(self) -> Sequence[DeductionRule]:
        """Every rule currently flagged active, in a stable order."""

        raise NotImplementedError
