"""Example: resolve a few days of punches and build a payslip without Flask or MySQL.

The calculation layer is pure; services and repositories only feed it data.
"""

from datetime import date, datetime, time

from src.workforce.workforce.advances.model import Advance
from src.workforce.workforce.attendance.logic import process_daily_status
from src.workforce.workforce.attendance.model import AttendanceRecord, Punch
from src.workforce.workforce.common.datetime_utils import FixedClock
from src.workforce.workforce.core.enums import AdvanceStatus, PunchType, WageType
from src.workforce.workforce.payroll.aggregator import generate_monthly_payroll
from src.workforce.workforce.payroll.calculator.standard_calculator import StandardWageCalculator
from src.workforce.workforce.shifts.model import ShiftConfig
from src.workforce.workforce.workers.model import Allowances, WageConfig, Worker


def main():
    shift = ShiftConfig(shift_id="general", name="General Shift", start_time=time(9, 0), end_time=time(18, 0))
    worker = Worker(
        worker_id="w001",
        tenant_id="demo",
        name="Ramesh Kumar",
        shift_id="general",
        wage_config=WageConfig(type=WageType.DAILY, amount=600, allowances=Allowances(travel=50, food=30)),
    )
    clock = FixedClock(datetime(2025, 3, 31, 20, 0))
    calculator = StandardWageCalculator()

    wages = []
    for day, (check_in, check_out) in enumerate([((9, 5), (18, 10)), ((9, 45), (14, 0)), ((8, 55), (19, 30))], start=3):
        work_date = date(2025, 3, day)
        record = AttendanceRecord(
            tenant_id="demo",
            worker_id="w001",
            work_date=work_date,
            shift_id="general",
            timeline=(
                Punch(datetime.combine(work_date, time(*check_in)), PunchType.IN, "Kiosk"),
                Punch(datetime.combine(work_date, time(*check_out)), PunchType.OUT, "Kiosk"),
            ),
        )
        resolved = process_daily_status(record, shift, 0, clock=clock)
        print(work_date, resolved.status.value, resolved.hours.net)
        wages.append(calculator.calculate_daily_wage(worker, resolved))

    advances = [Advance("a1", "demo", "w001", 500, date(2025, 3, 10), "Medical", AdvanceStatus.APPROVED)]
    payroll = generate_monthly_payroll(worker, "2025-03", wages, advances)
    print(payroll.earnings, payroll.deductions.total, payroll.net_payable)


if __name__ == "__main__":
    main()
