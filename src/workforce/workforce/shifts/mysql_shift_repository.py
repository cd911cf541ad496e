from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import ShiftConfig
from .repository import ShiftRepository

_COLUMNS = """
    shift_id, name, start_time, end_time,
    grace_period_mins, max_grace_allowed, break_duration_mins, min_overtime_mins
"""


def _to_shift(r: Dict[str, Any]) -> ShiftConfig:
    return ShiftConfig(
        shift_id=str(r["shift_id"]),
        name=r["name"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        grace_period_mins=int(r["grace_period_mins"]),
        max_grace_allowed=int(r["max_grace_allowed"]),
        break_duration_mins=int(r.get("break_duration_mins") or 0),
        min_overtime_mins=int(r.get("min_overtime_mins") or 0),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, tenant_id: str, shift_id: str) -> Optional[ShiftConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM shifts WHERE tenant_id=%s AND shift_id=%s",
                (tenant_id, shift_id),
            )
            r = fetchone(cur)
            return _to_shift(r) if r else None
