from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class WageBreakdown:
    base_wage: float
    overtime_wage: float
    allowances: float
    total: float


@dataclass(frozen=True)
class WageMeta:
    rate_used: float
    hours_worked: float
    overtime_hours: float
    is_overtime_limit_exceeded: bool


@dataclass(frozen=True)
class DailyWageRecord:
    """Projection of one attendance record into pay; always recomputable."""

    tenant_id: str
    worker_id: str
    work_date: date
    attendance_id: str
    breakdown: WageBreakdown
    meta: WageMeta

    @property
    def record_id(self) -> str:
        return f"wage_{self.attendance_id}"


@dataclass(frozen=True)
class FlatDeduction:
    """Configured monthly charge (canteen, processing fee, ...)."""

    description: str
    amount: float
    only_with_advances: bool = False


@dataclass(frozen=True)
class DeductionLine:
    description: str
    amount: float


@dataclass(frozen=True)
class AttendanceSummary:
    total_days: int
    present_days: int
    half_days: int
    absent_days: int
    total_regular_hours: float
    total_overtime_hours: float


@dataclass(frozen=True)
class Earnings:
    basic: float
    overtime: float
    allowances: float
    gross: float


@dataclass(frozen=True)
class Deductions:
    advances: float
    flat: float
    total: float
    details: tuple[DeductionLine, ...] = ()


@dataclass(frozen=True)
class MonthlyPayroll:
    tenant_id: str
    worker_id: str
    worker_name: str
    worker_designation: str
    worker_department: str
    month: str
    attendance_summary: AttendanceSummary
    earnings: Earnings
    deductions: Deductions
    net_payable: float
    carried_forward_advance: float = 0.0
    status: PayrollStatus = PayrollStatus.DRAFT

    @property
    def payroll_id(self) -> str:
        return f"payroll_{self.worker_id}_{self.month}"


@dataclass(frozen=True)
class ComplianceReport:
    compliant: bool
    violations: tuple[str, ...] = ()
    recommendation: Optional[str] = None
