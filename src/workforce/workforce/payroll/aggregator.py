"""Monthly folding of daily wages and advances into a payroll."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional, Sequence

from ..advances.model import Advance
from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import in_month
from ..common.money import round2, round_to
from ..core.constants import DEFAULT_OT_DAILY_LIMIT_HOURS, DEFAULT_OT_WEEKLY_LIMIT_HOURS
from ..core.enums import AdvanceStatus, PayrollStatus
from ..workers.model import Worker
from .calculator.base import WageCalculator
from .calculator.standard_calculator import StandardWageCalculator
from .model import (
    AttendanceSummary,
    ComplianceReport,
    DailyWageRecord,
    DeductionLine,
    Deductions,
    Earnings,
    FlatDeduction,
    MonthlyPayroll,
)

COMPLIANCE_RECOMMENDATION = "Reduce OT hours or hire additional shift workers."


def approved_advances_in_month(worker: Worker, month: str, advances: Iterable[Advance]) -> list[Advance]:
    return [
        a
        for a in advances
        if a.worker_id == worker.worker_id and a.status == AdvanceStatus.APPROVED and in_month(a.advance_date, month)
    ]


def generate_monthly_payroll(
    worker: Worker,
    month: str,
    daily_wages: Iterable[DailyWageRecord],
    advances: Iterable[Advance],
    *,
    flat_deductions: Sequence[FlatDeduction] = (),
) -> MonthlyPayroll:
    """Fold one month of daily wages plus approved advances into a DRAFT payroll.

    `present_days` counts every paid day (PRESENT and HALF_DAY alike);
    `half_days` is the subset paid below the day rate. Net payable is not
    clamped: a negative value means advances exceeded earnings.
    """
    month_wages = [w for w in daily_wages if in_month(w.work_date, month)]

    present_days = 0
    half_days = 0
    total_basic = 0.0
    total_ot_pay = 0.0
    total_allowances = 0.0
    total_regular_hours = 0.0
    total_overtime_hours = 0.0

    for dw in month_wages:
        if dw.breakdown.base_wage > 0:
            present_days += 1
            if dw.breakdown.base_wage < dw.meta.rate_used:
                half_days += 1

        total_basic += dw.breakdown.base_wage
        total_ot_pay += dw.breakdown.overtime_wage
        total_allowances += dw.breakdown.allowances
        total_regular_hours += dw.meta.hours_worked - dw.meta.overtime_hours
        total_overtime_hours += dw.meta.overtime_hours

    gross = total_basic + total_ot_pay + total_allowances

    details: list[DeductionLine] = []
    advance_total = 0.0
    for adv in approved_advances_in_month(worker, month, advances):
        advance_total += adv.amount
        details.append(DeductionLine(description=f"Advance ({adv.advance_date.isoformat()})", amount=adv.amount))

    flat_total = 0.0
    for charge in flat_deductions:
        if charge.amount <= 0:
            continue
        if charge.only_with_advances and advance_total <= 0:
            continue
        flat_total += charge.amount
        details.append(DeductionLine(description=charge.description, amount=charge.amount))

    total_deductions = advance_total + flat_total
    net_payable = round2(gross - total_deductions)
    total_days = worker.wage_config.effective_working_days()

    return MonthlyPayroll(
        tenant_id=worker.tenant_id,
        worker_id=worker.worker_id,
        worker_name=worker.name,
        worker_designation=worker.designation,
        worker_department=worker.department,
        month=month,
        attendance_summary=AttendanceSummary(
            total_days=total_days,
            present_days=present_days,
            half_days=half_days,
            absent_days=max(0, total_days - present_days),
            total_regular_hours=round_to(total_regular_hours, 1),
            total_overtime_hours=round_to(total_overtime_hours, 1),
        ),
        earnings=Earnings(
            basic=round2(total_basic),
            overtime=round2(total_ot_pay),
            allowances=round2(total_allowances),
            gross=round2(gross),
        ),
        deductions=Deductions(
            advances=round2(advance_total),
            flat=round2(flat_total),
            total=round2(total_deductions),
            details=tuple(details),
        ),
        net_payable=net_payable,
        carried_forward_advance=max(0.0, -net_payable),
        status=PayrollStatus.DRAFT,
    )


def calculate_current_earnings(
    worker: Worker,
    month: str,
    records: Iterable[AttendanceRecord],
    *,
    calculator: Optional[WageCalculator] = None,
) -> float:
    """Wages earned so far in `month`; used to cap new advances."""
    calculator = calculator or StandardWageCalculator()
    total = 0.0
    for record in records:
        if record.worker_id != worker.worker_id or not in_month(record.work_date, month):
            continue
        total += calculator.calculate_daily_wage(worker, record).breakdown.total
    return round2(total)


def check_compliance(
    daily_wages: Iterable[DailyWageRecord],
    *,
    daily_limit_hours: float = DEFAULT_OT_DAILY_LIMIT_HOURS,
    weekly_limit_hours: float = DEFAULT_OT_WEEKLY_LIMIT_HOURS,
) -> ComplianceReport:
    """Overtime limits: per day, and per ISO week."""
    violations: list[str] = []
    weekly: dict[tuple[int, int], float] = defaultdict(float)

    for dw in sorted(daily_wages, key=lambda w: w.work_date):
        ot = dw.meta.overtime_hours
        if ot > daily_limit_hours:
            violations.append(f"Daily OT limit exceeded on {dw.work_date.isoformat()} ({ot} hrs)")
        iso = dw.work_date.isocalendar()
        weekly[(iso[0], iso[1])] += ot

    for (year, week), total in sorted(weekly.items()):
        if total > weekly_limit_hours:
            violations.append(f"Weekly OT limit exceeded in {year}-W{week:02d} (Total: {round2(total)} hrs)")

    return ComplianceReport(
        compliant=not violations,
        violations=tuple(violations),
        recommendation=COMPLIANCE_RECOMMENDATION if violations else None,
    )
