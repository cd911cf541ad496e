from dataclasses import replace
from datetime import date, datetime, time

import pytest

from src.workforce.workforce.attendance.model import AttendanceRecord, Punch, WorkedHours
from src.workforce.workforce.core.enums import AttendanceStatus, OvertimeRateMode, PunchType, WageType
from src.workforce.workforce.payroll.calculator.standard_calculator import StandardWageCalculator
from src.workforce.workforce.workers.model import Allowances, WageConfig

DAY = date(2025, 3, 3)


def _record(status, *, net=0.0, overtime=0.0, out_at=time(18, 0)):
    timeline = (
        Punch(datetime.combine(DAY, time(9, 0)), PunchType.IN, "Kiosk"),
        Punch(datetime.combine(DAY, out_at), PunchType.OUT, "Kiosk"),
    )
    return AttendanceRecord(
        tenant_id="t1",
        worker_id="w1",
        work_date=DAY,
        shift_id="general",
        timeline=timeline,
        status=status,
        hours=WorkedHours(gross=net, net=net, overtime=overtime),
    )


def test_half_day_pays_half_rate_plus_allowances(daily_worker):
    worker = replace(
        daily_worker,
        wage_config=replace(daily_worker.wage_config, allowances=Allowances(travel=50, food=30)),
    )

    wage = StandardWageCalculator().calculate_daily_wage(worker, _record(AttendanceStatus.HALF_DAY, net=5))

    assert wage.breakdown.base_wage == 300
    assert wage.breakdown.allowances == 80
    assert wage.breakdown.total == 380
    assert wage.meta.rate_used == 600
    assert wage.record_id == "wage_t1_w1_2025-03-03"


def test_absent_day_pays_nothing(daily_worker):
    wage = StandardWageCalculator().calculate_daily_wage(daily_worker, _record(AttendanceStatus.ABSENT, net=2))

    assert wage.breakdown.total == 0
    assert wage.breakdown.allowances == 0


def test_night_allowance_only_for_late_checkout(daily_worker):
    calc = StandardWageCalculator()

    day = calc.calculate_daily_wage(daily_worker, _record(AttendanceStatus.PRESENT, net=9))
    night = calc.calculate_daily_wage(daily_worker, _record(AttendanceStatus.PRESENT, net=13.5, out_at=time(22, 30)))

    assert day.breakdown.allowances == 80
    assert night.breakdown.allowances == 180


def test_overtime_defaults_to_double_hourly(daily_worker):
    wage = StandardWageCalculator().calculate_daily_wage(
        daily_worker, _record(AttendanceStatus.PRESENT, net=11, overtime=2)
    )

    assert wage.breakdown.overtime_wage == 300
    assert wage.breakdown.total == 600 + 300 + 80
    assert wage.meta.is_overtime_limit_exceeded is False


def test_flat_overtime_rate_override(daily_worker):
    worker = replace(
        daily_worker,
        wage_config=replace(
            daily_worker.wage_config,
            overtime_rate_mode=OvertimeRateMode.FLAT_OVERRIDE,
            overtime_rate_per_hour=120,
        ),
    )

    wage = StandardWageCalculator().calculate_daily_wage(worker, _record(AttendanceStatus.PRESENT, net=11, overtime=2))

    assert wage.breakdown.overtime_wage == 240


def test_overtime_not_paid_when_not_eligible(daily_worker):
    worker = replace(daily_worker, wage_config=replace(daily_worker.wage_config, overtime_eligible=False))

    wage = StandardWageCalculator().calculate_daily_wage(worker, _record(AttendanceStatus.PRESENT, net=11, overtime=2))

    assert wage.breakdown.overtime_wage == 0
    assert wage.meta.overtime_hours == 2


def test_overtime_limit_flag(daily_worker):
    wage = StandardWageCalculator().calculate_daily_wage(
        daily_worker, _record(AttendanceStatus.PRESENT, net=13.5, overtime=4.5)
    )

    assert wage.meta.is_overtime_limit_exceeded is True


def test_monthly_salary_is_split_over_working_days(daily_worker):
    worker = replace(
        daily_worker,
        wage_config=WageConfig(type=WageType.MONTHLY, amount=15600, working_days_per_month=0),
    )

    wage = StandardWageCalculator().calculate_daily_wage(worker, _record(AttendanceStatus.PRESENT, net=9))

    assert wage.meta.rate_used == 600
    assert wage.breakdown.base_wage == 600


def test_monthly_rate_is_rounded_for_display(daily_worker):
    worker = replace(daily_worker, wage_config=WageConfig(type=WageType.MONTHLY, amount=10000))

    wage = StandardWageCalculator().calculate_daily_wage(worker, _record(AttendanceStatus.PRESENT, net=9))

    assert wage.meta.rate_used == pytest.approx(384.62)


def test_configured_overtime_rate_applies_without_mode(daily_worker):
    worker = replace(daily_worker, wage_config=replace(daily_worker.wage_config, overtime_rate_per_hour=120))

    wage = StandardWageCalculator().calculate_daily_wage(worker, _record(AttendanceStatus.PRESENT, net=11, overtime=2))

    assert wage.breakdown.overtime_wage == 240


def test_double_hourly_mode_ignores_configured_rate(daily_worker):
    worker = replace(
        daily_worker,
        wage_config=replace(
            daily_worker.wage_config,
            overtime_rate_mode=OvertimeRateMode.DOUBLE_HOURLY,
            overtime_rate_per_hour=120,
        ),
    )

    wage = StandardWageCalculator().calculate_daily_wage(worker, _record(AttendanceStatus.PRESENT, net=11, overtime=2))

    assert wage.breakdown.overtime_wage == 300


def test_flat_override_without_rate_falls_back_and_warns(daily_worker, caplog):
    worker = replace(
        daily_worker,
        wage_config=replace(daily_worker.wage_config, overtime_rate_mode=OvertimeRateMode.FLAT_OVERRIDE),
    )

    with caplog.at_level("WARNING"):
        wage = StandardWageCalculator().calculate_daily_wage(
            worker, _record(AttendanceStatus.PRESENT, net=11, overtime=2)
        )

    assert wage.breakdown.overtime_wage == 300
    assert "without overtime_rate_per_hour" in caplog.text
