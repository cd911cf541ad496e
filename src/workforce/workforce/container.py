from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .advances.mysql_advance_repository import MySQLAdvanceRepository
from .advances.service import AdvanceService
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, SystemClock
from .core.constants import DEFAULT_OT_DAILY_LIMIT_HOURS, DEFAULT_OT_WEEKLY_LIMIT_HOURS, DEFAULT_PUNCH_COOLDOWN_SECONDS
from .database.connection import DatabaseConnection, DBConfig
from .payroll.calculator.standard_calculator import StandardWageCalculator
from .payroll.model import FlatDeduction
from .payroll.mysql_payroll_repository import MySQLDailyWageRepository, MySQLPayrollRepository
from .payroll.service import PayrollService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .workers.mysql_worker_repository import MySQLWorkerRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    workers_repo: MySQLWorkerRepository
    shifts_repo: MySQLShiftRepository
    attendance_repo: MySQLAttendanceRepository
    wages_repo: MySQLDailyWageRepository
    payrolls_repo: MySQLPayrollRepository
    advances_repo: MySQLAdvanceRepository

    attendance_service: AttendanceService
    payroll_service: PayrollService
    advance_service: AdvanceService


def build_container(*, db_config: dict, settings: Optional[object] = None, clock: Optional[Clock] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    clock = clock or SystemClock()

    flat_deductions = tuple(
        FlatDeduction(
            description=str(d["description"]),
            amount=float(d["amount"]),
            only_with_advances=bool(d.get("only_with_advances", False)),
        )
        for d in getattr(settings, "FLAT_DEDUCTIONS", [])
    )

    workers_repo = MySQLWorkerRepository(conn)
    shifts_repo = MySQLShiftRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    wages_repo = MySQLDailyWageRepository(conn)
    payrolls_repo = MySQLPayrollRepository(conn)
    advances_repo = MySQLAdvanceRepository(conn)

    calculator = StandardWageCalculator()
    attendance_service = AttendanceService(
        attendance_repo,
        workers_repo,
        shifts_repo,
        clock=clock,
        strategy_factory=AttendanceStrategyFactory(),
        punch_cooldown_seconds=getattr(settings, "PUNCH_COOLDOWN_SECONDS", DEFAULT_PUNCH_COOLDOWN_SECONDS),
    )
    payroll_service = PayrollService(
        attendance_repo,
        workers_repo,
        wages_repo,
        payrolls_repo,
        advances_repo,
        calculator=calculator,
        flat_deductions=flat_deductions,
        ot_daily_limit_hours=getattr(settings, "OT_DAILY_LIMIT_HOURS", DEFAULT_OT_DAILY_LIMIT_HOURS),
        ot_weekly_limit_hours=getattr(settings, "OT_WEEKLY_LIMIT_HOURS", DEFAULT_OT_WEEKLY_LIMIT_HOURS),
    )
    advance_service = AdvanceService(advances_repo, attendance_repo, workers_repo, calculator=calculator)

    return Container(
        conn=conn,
        workers_repo=workers_repo,
        shifts_repo=shifts_repo,
        attendance_repo=attendance_repo,
        wages_repo=wages_repo,
        payrolls_repo=payrolls_repo,
        advances_repo=advances_repo,
        attendance_service=attendance_service,
        payroll_service=payroll_service,
        advance_service=advance_service,
    )
