from __future__ import annotations

from typing import Sequence

from ..common.decimals import to_decimal
from ..core.enums import DeductionKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import DeductionRule
from .repository import DeductionRuleRepository


class MySQLDeductionRuleRepository(DeductionRuleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[DeductionRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT rule_id, name, kind, value, is_active, description
                FROM deduction_rules
                WHERE is_active=1
                ORDER BY rule_id ASC
                """
            )
            rows = fetchall(cur)
            return [
                DeductionRule(
                    rule_id=int(r["rule_id"]),
                    name=r["name"],
                    kind=DeductionKind(r["kind"]),
                    value=to_decimal(r["value"]),
                    is_active=bool(r["is_active"]),
                    description=r.get("description"),
                )
                for r in rows
            ]
