from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from ..advances.repository import AdvanceRepository
from ..attendance.repository import AttendanceRepository
from ..core.constants import DEFAULT_OT_DAILY_LIMIT_HOURS, DEFAULT_OT_WEEKLY_LIMIT_HOURS
from ..core.enums import PayrollStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .aggregator import check_compliance, generate_monthly_payroll
from .calculator.base import WageCalculator
from .calculator.standard_calculator import StandardWageCalculator
from .model import ComplianceReport, DailyWageRecord, FlatDeduction, MonthlyPayroll
from .repository import DailyWageRepository, PayrollRepository

logger = logging.getLogger(__name__)


class PayrollService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        workers: WorkerRepository,
        wages: DailyWageRepository,
        payrolls: PayrollRepository,
        advances: AdvanceRepository,
        *,
        calculator: Optional[WageCalculator] = None,
        flat_deductions: Sequence[FlatDeduction] = (),
        ot_daily_limit_hours: float = DEFAULT_OT_DAILY_LIMIT_HOURS,
        ot_weekly_limit_hours: float = DEFAULT_OT_WEEKLY_LIMIT_HOURS,
    ):
        self._attendance = attendance
        self._workers = workers
        self._wages = wages
        self._payrolls = payrolls
        self._advances = advances
        self._calculator = calculator or StandardWageCalculator()
        self._flat_deductions = tuple(flat_deductions)
        self._ot_daily_limit = float(ot_daily_limit_hours)
        self._ot_weekly_limit = float(ot_weekly_limit_hours)

    def _get_worker(self, tenant_id: str, worker_id: str) -> Worker:
        worker = self._workers.get_by_id(tenant_id, worker_id)
        if not worker:
            raise NotFoundError(f"Worker {worker_id} not found")
        return worker

    def daily_wages_for_month(self, tenant_id: str, worker_id: str, month: str) -> list[DailyWageRecord]:
        """Recompute each day's wage from attendance and refresh the stored projection."""
        worker = self._get_worker(tenant_id, worker_id)
        wages = []
        for record in self._attendance.list_for_worker_month(tenant_id, worker_id, month):
            wage = self._calculator.calculate_daily_wage(worker, record)
            self._wages.save(wage)
            wages.append(wage)
        return wages

    def generate(self, tenant_id: str, worker_id: str, month: str) -> MonthlyPayroll:
        existing = self._payrolls.get(tenant_id, worker_id, month)
        if existing and existing.status != PayrollStatus.DRAFT:
            raise ValidationError(f"Payroll for {month} is {existing.status.value} and cannot be regenerated")

        worker = self._get_worker(tenant_id, worker_id)
        wages = self.daily_wages_for_month(tenant_id, worker_id, month)
        advances = self._advances.list_for_worker(tenant_id, worker_id)

        payroll = generate_monthly_payroll(worker, month, wages, advances, flat_deductions=self._flat_deductions)
        self._payrolls.save(payroll)

        if payroll.net_payable < 0:
            logger.warning("payroll %s is negative (%.2f)", payroll.payroll_id, payroll.net_payable)
        logger.info("generated payroll %s gross=%.2f net=%.2f", payroll.payroll_id, payroll.earnings.gross, payroll.net_payable)
        return payroll

    def generate_for_tenant(self, tenant_id: str, month: str) -> list[MonthlyPayroll]:
        """Payroll sheet of every active worker; LOCKED/PAID months are returned as stored."""
        sheet = []
        for worker in self._workers.list_active(tenant_id):
            existing = self._payrolls.get(tenant_id, worker.worker_id, month)
            if existing and existing.status != PayrollStatus.DRAFT:
                logger.info("skipping %s: payroll already %s", existing.payroll_id, existing.status.value)
                sheet.append(existing)
                continue
            sheet.append(self.generate(tenant_id, worker.worker_id, month))
        return sheet

    def _transition(self, tenant_id: str, worker_id: str, month: str, allowed_from, to: PayrollStatus) -> MonthlyPayroll:
        payroll = self._payrolls.get(tenant_id, worker_id, month)
        if not payroll:
            raise NotFoundError(f"No payroll for {worker_id} in {month}")
        if payroll.status not in allowed_from:
            raise ValidationError(f"Cannot move payroll from {payroll.status.value} to {to.value}")

        updated = replace(payroll, status=to)
        self._payrolls.save(updated)
        logger.info("payroll %s -> %s", updated.payroll_id, to.value)
        return updated

    def lock(self, tenant_id: str, worker_id: str, month: str) -> MonthlyPayroll:
        return self._transition(tenant_id, worker_id, month, (PayrollStatus.DRAFT,), PayrollStatus.LOCKED)

    def mark_paid(self, tenant_id: str, worker_id: str, month: str) -> MonthlyPayroll:
        return self._transition(
            tenant_id, worker_id, month, (PayrollStatus.DRAFT, PayrollStatus.LOCKED), PayrollStatus.PAID
        )

    def compliance(self, tenant_id: str, worker_id: str, month: str) -> ComplianceReport:
        wages = self.daily_wages_for_month(tenant_id, worker_id, month)
        return check_compliance(
            wages,
            daily_limit_hours=self._ot_daily_limit,
            weekly_limit_hours=self._ot_weekly_limit,
        )
