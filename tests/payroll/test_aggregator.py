from datetime import date, timedelta

from src.workforce.workforce.advances.model import Advance
from src.workforce.workforce.core.enums import AdvanceStatus, PayrollStatus
from src.workforce.workforce.payroll.aggregator import (
    COMPLIANCE_RECOMMENDATION,
    check_compliance,
    generate_monthly_payroll,
)
from src.workforce.workforce.payroll.model import DailyWageRecord, FlatDeduction, WageBreakdown, WageMeta


def _wage(day, *, base=600.0, ot_wage=0.0, allowances=80.0, hours=9.0, ot_hours=0.0, rate=600.0):
    return DailyWageRecord(
        tenant_id="t1",
        worker_id="w1",
        work_date=day,
        attendance_id=f"t1_w1_{day.isoformat()}",
        breakdown=WageBreakdown(
            base_wage=base,
            overtime_wage=ot_wage,
            allowances=allowances,
            total=base + ot_wage + allowances,
        ),
        meta=WageMeta(rate_used=rate, hours_worked=hours, overtime_hours=ot_hours, is_overtime_limit_exceeded=False),
    )


def _advance(amount, day, status=AdvanceStatus.APPROVED, worker_id="w1"):
    return Advance(
        advance_id=f"a-{day.isoformat()}-{amount}",
        tenant_id="t1",
        worker_id=worker_id,
        amount=amount,
        advance_date=day,
        status=status,
    )


def test_payroll_totals_and_attendance_summary(daily_worker):
    wages = [
        _wage(date(2025, 3, 3), ot_wage=150, hours=10, ot_hours=1),
        _wage(date(2025, 3, 4), base=300, hours=5),
        _wage(date(2025, 3, 5), base=0, allowances=0, hours=2),
        _wage(date(2025, 2, 28)),
    ]

    payroll = generate_monthly_payroll(daily_worker, "2025-03", wages, [])

    summary = payroll.attendance_summary
    assert summary.total_days == 26
    assert summary.present_days == 2
    assert summary.half_days == 1
    assert summary.absent_days == 24
    assert summary.total_regular_hours == 16.0
    assert summary.total_overtime_hours == 1.0

    assert payroll.earnings.basic == 900
    assert payroll.earnings.overtime == 150
    assert payroll.earnings.allowances == 160
    assert payroll.earnings.gross == 1210
    assert payroll.net_payable == 1210
    assert payroll.status == PayrollStatus.DRAFT
    assert payroll.payroll_id == "payroll_w1_2025-03"
    assert payroll.worker_designation == "Helper"


def test_approved_advances_in_month_are_deducted_with_date(daily_worker):
    wages = [_wage(date(2025, 3, d)) for d in range(3, 8)]
    advances = [
        _advance(2000, date(2025, 3, 10)),
        _advance(500, date(2025, 3, 12), status=AdvanceStatus.PENDING),
        _advance(700, date(2025, 2, 20)),
        _advance(900, date(2025, 3, 11), worker_id="w2"),
    ]

    payroll = generate_monthly_payroll(daily_worker, "2025-03", wages, advances)

    assert payroll.deductions.advances == 2000
    assert payroll.deductions.total == 2000
    assert [line.description for line in payroll.deductions.details] == ["Advance (2025-03-10)"]
    assert payroll.net_payable == 3400 - 2000


def test_flat_deductions_apply_as_configured(daily_worker):
    wages = [_wage(date(2025, 3, 3))]
    charges = [
        FlatDeduction("Canteen", 200),
        FlatDeduction("Advance processing fee", 20, only_with_advances=True),
        FlatDeduction("Unused", 0),
    ]

    without_advance = generate_monthly_payroll(daily_worker, "2025-03", wages, [], flat_deductions=charges)
    with_advance = generate_monthly_payroll(
        daily_worker, "2025-03", wages, [_advance(100, date(2025, 3, 3))], flat_deductions=charges
    )

    assert without_advance.deductions.flat == 200
    assert [d.description for d in without_advance.deductions.details] == ["Canteen"]
    assert with_advance.deductions.flat == 220
    assert with_advance.deductions.total == 320


def test_advances_larger_than_earnings_give_negative_net(daily_worker):
    wages = [_wage(date(2025, 3, 3))]

    payroll = generate_monthly_payroll(daily_worker, "2025-03", wages, [_advance(1000, date(2025, 3, 3))])

    assert payroll.net_payable == -320
    assert payroll.carried_forward_advance == 320


def test_compliance_flags_daily_and_weekly_overtime():
    start = date(2025, 3, 3)
    wages = [_wage(start + timedelta(days=i), ot_hours=9) for i in range(7)]

    report = check_compliance(wages)

    assert report.compliant is False
    assert len(report.violations) == 8
    assert report.violations[0] == "Daily OT limit exceeded on 2025-03-03 (9 hrs)"
    assert report.violations[-1] == "Weekly OT limit exceeded in 2025-W10 (Total: 63.0 hrs)"
    assert report.recommendation == COMPLIANCE_RECOMMENDATION


def test_compliance_ok_within_limits():
    wages = [_wage(date(2025, 3, 3), ot_hours=2), _wage(date(2025, 3, 4), ot_hours=1.5)]

    report = check_compliance(wages)

    assert report.compliant is True
    assert report.violations == ()
    assert report.recommendation is None
