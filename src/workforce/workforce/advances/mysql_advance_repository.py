from __future__ import annotations

from typing import Any, Dict, Sequence

from ..core.enums import AdvanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Advance
from .repository import AdvanceRepository


def _to_advance(r: Dict[str, Any]) -> Advance:
    return Advance(
        advance_id=str(r["advance_id"]),
        tenant_id=str(r["tenant_id"]),
        worker_id=str(r["worker_id"]),
        amount=float(r["amount"]),
        advance_date=r["advance_date"],
        reason=r.get("reason") or "",
        status=AdvanceStatus(r["status"]),
    )


class MySQLAdvanceRepository(AdvanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_worker(self, tenant_id: str, worker_id: str) -> Sequence[Advance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT advance_id, tenant_id, worker_id, amount, advance_date, reason, status
                FROM advances
                WHERE tenant_id=%s AND worker_id=%s
                ORDER BY advance_date
                """,
                (tenant_id, worker_id),
            )
            return [_to_advance(r) for r in fetchall(cur)]

    def create(self, advance: Advance) -> Advance:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO advances(advance_id, tenant_id, worker_id, amount, advance_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    advance.advance_id,
                    advance.tenant_id,
                    advance.worker_id,
                    advance.amount,
                    advance.advance_date,
                    advance.reason,
                    advance.status.value,
                ),
            )
        return advance
