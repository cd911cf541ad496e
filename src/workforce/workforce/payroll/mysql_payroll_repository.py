from __future__ import annotations

from typing import Any, Dict, Optional

from ..common.serialization import to_jsonable
from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchone, load_json
from .model import (
    AttendanceSummary,
    DailyWageRecord,
    DeductionLine,
    Deductions,
    Earnings,
    MonthlyPayroll,
)
from .repository import DailyWageRepository, PayrollRepository


class MySQLDailyWageRepository(DailyWageRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, wage: DailyWageRecord) -> None:
        b, m = wage.breakdown, wage.meta
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                REPLACE INTO daily_wages(
                    record_id, tenant_id, worker_id, work_date, attendance_id,
                    base_wage, overtime_wage, allowances, total,
                    rate_used, hours_worked, overtime_hours, is_overtime_limit_exceeded
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    wage.record_id, wage.tenant_id, wage.worker_id, wage.work_date, wage.attendance_id,
                    b.base_wage, b.overtime_wage, b.allowances, b.total,
                    m.rate_used, m.hours_worked, m.overtime_hours, int(m.is_overtime_limit_exceeded),
                ),
            )


def _to_payroll(r: Dict[str, Any]) -> MonthlyPayroll:
    deductions = load_json(r["deductions"])
    return MonthlyPayroll(
        tenant_id=str(r["tenant_id"]),
        worker_id=str(r["worker_id"]),
        worker_name=r.get("worker_name") or "",
        worker_designation=r.get("worker_designation") or "",
        worker_department=r.get("worker_department") or "",
        month=r["month"],
        attendance_summary=AttendanceSummary(**load_json(r["attendance_summary"])),
        earnings=Earnings(**load_json(r["earnings"])),
        deductions=Deductions(
            advances=float(deductions["advances"]),
            flat=float(deductions["flat"]),
            total=float(deductions["total"]),
            details=tuple(DeductionLine(**d) for d in deductions.get("details", [])),
        ),
        net_payable=float(r["net_payable"]),
        carried_forward_advance=float(r.get("carried_forward_advance") or 0),
        status=PayrollStatus(r["status"]),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, tenant_id: str, worker_id: str, month: str) -> Optional[MonthlyPayroll]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT * FROM payrolls WHERE tenant_id=%s AND worker_id=%s AND month=%s",
                (tenant_id, worker_id, month),
            )
            r = fetchone(cur)
            return _to_payroll(r) if r else None

    def save(self, payroll: MonthlyPayroll) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                REPLACE INTO payrolls(
                    tenant_id, worker_id, month, worker_name, worker_designation, worker_department,
                    attendance_summary, earnings, deductions, net_payable, carried_forward_advance, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    payroll.tenant_id,
                    payroll.worker_id,
                    payroll.month,
                    payroll.worker_name,
                    payroll.worker_designation,
                    payroll.worker_department,
                    dump_json(to_jsonable(payroll.attendance_summary)),
                    dump_json(to_jsonable(payroll.earnings)),
                    dump_json(to_jsonable(payroll.deductions)),
                    payroll.net_payable,
                    payroll.carried_forward_advance,
                    payroll.status.value,
                ),
            )
