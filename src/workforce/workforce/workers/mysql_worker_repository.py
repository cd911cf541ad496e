from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import OvertimeRateMode, WageType, WorkerStatus
from ..core.constants import DEFAULT_OVERTIME_LIMIT_HOURS, DEFAULT_WORKING_DAYS_PER_MONTH
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json
from .model import Allowances, WageConfig, Worker
from .repository import WorkerRepository


def wage_config_from_dict(data: Dict[str, Any]) -> WageConfig:
    allowances = data.get("allowances") or {}
    rate_override = data.get("overtime_rate_per_hour")
    return WageConfig(
        type=WageType(data["type"]),
        amount=float(data["amount"]),
        overtime_eligible=bool(data.get("overtime_eligible", False)),
        overtime_rate_per_hour=float(rate_override) if rate_override is not None else None,
        working_days_per_month=int(data.get("working_days_per_month") or DEFAULT_WORKING_DAYS_PER_MONTH),
        allowances=Allowances(
            travel=float(allowances.get("travel") or 0),
            food=float(allowances.get("food") or 0),
            night_shift=float(allowances.get("night_shift") or 0),
        ),
        overtime_rate_mode=OvertimeRateMode(data["overtime_rate_mode"]) if data.get("overtime_rate_mode") else None,
        overtime_limit_hours=float(data.get("overtime_limit_hours") or DEFAULT_OVERTIME_LIMIT_HOURS),
    )


def _to_worker(r: Dict[str, Any]) -> Worker:
    return Worker(
        worker_id=str(r["worker_id"]),
        tenant_id=str(r["tenant_id"]),
        name=r["name"],
        shift_id=r.get("shift_id") or "",
        wage_config=wage_config_from_dict(load_json(r["wage_config"])),
        designation=r.get("designation") or "",
        department=r.get("department") or "",
        status=WorkerStatus(r.get("status") or WorkerStatus.ACTIVE.value),
    )


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, tenant_id: str, worker_id: str) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT tenant_id, worker_id, name, shift_id, designation, department, status, wage_config
                FROM workers
                WHERE tenant_id=%s AND worker_id=%s
                """,
                (tenant_id, worker_id),
            )
            r = fetchone(cur)
            return _to_worker(r) if r else None

    def list_active(self, tenant_id: str) -> Sequence[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT tenant_id, worker_id, name, shift_id, designation, department, status, wage_config
                FROM workers
                WHERE tenant_id=%s AND status=%s
                ORDER BY name
                """,
                (tenant_id, WorkerStatus.ACTIVE.value),
            )
            return [_to_worker(r) for r in fetchall(cur)]
