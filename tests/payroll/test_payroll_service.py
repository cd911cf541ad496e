from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time

import pytest

from src.workforce.workforce.advances.model import Advance
from src.workforce.workforce.attendance import logic
from src.workforce.workforce.attendance.model import AttendanceRecord, Punch
from src.workforce.workforce.core.enums import AdvanceStatus, PayrollStatus, PunchType, WorkerStatus
from src.workforce.workforce.core.exceptions import NotFoundError, ValidationError
from src.workforce.workforce.payroll.model import FlatDeduction
from src.workforce.workforce.payroll.service import PayrollService


def _seed_day(repo, shift, day, check_in, check_out):
    record = AttendanceRecord(
        tenant_id="t1",
        worker_id="w1",
        work_date=day,
        shift_id="general",
        timeline=(
            Punch(datetime.combine(day, check_in), PunchType.IN, "Kiosk"),
            Punch(datetime.combine(day, check_out), PunchType.OUT, "Kiosk"),
        ),
    )
    repo.put(logic.process_daily_status(record, shift, 0))


@pytest.fixture
def service(attendance_repo, workers_repo, wages_repo, payrolls_repo, advances_repo, general_shift):
    _seed_day(attendance_repo, general_shift, date(2025, 3, 3), time(9, 0), time(18, 0))
    _seed_day(attendance_repo, general_shift, date(2025, 3, 4), time(9, 0), time(14, 0))
    _seed_day(attendance_repo, general_shift, date(2025, 3, 5), time(9, 0), time(21, 0))
    advances_repo.create(
        Advance("a1", "t1", "w1", 500, date(2025, 3, 10), "Medical", AdvanceStatus.APPROVED)
    )
    return PayrollService(
        attendance_repo,
        workers_repo,
        wages_repo,
        payrolls_repo,
        advances_repo,
        flat_deductions=[FlatDeduction("Canteen", 100)],
    )


def test_generate_builds_payroll_and_stores_daily_wages(service, wages_repo, payrolls_repo):
    payroll = service.generate("t1", "w1", "2025-03")

    assert len(wages_repo.saved) == 3
    assert "wage_t1_w1_2025-03-05" in wages_repo.saved
    # 600 + 300 + (600 + 3h * 150) plus 80 allowances on each paid day
    assert payroll.earnings.gross == 600 + 300 + 1050 + 240
    assert payroll.deductions.total == 600
    assert payroll.net_payable == 2190 - 600
    assert payroll.attendance_summary.present_days == 3
    assert payroll.attendance_summary.half_days == 1
    assert payrolls_repo.get("t1", "w1", "2025-03") == payroll


def test_draft_payroll_can_be_regenerated(service):
    service.generate("t1", "w1", "2025-03")

    again = service.generate("t1", "w1", "2025-03")

    assert again.status == PayrollStatus.DRAFT


def test_locked_payroll_cannot_be_regenerated(service):
    service.generate("t1", "w1", "2025-03")
    locked = service.lock("t1", "w1", "2025-03")

    assert locked.status == PayrollStatus.LOCKED
    with pytest.raises(ValidationError):
        service.generate("t1", "w1", "2025-03")


def test_payroll_status_moves_forward_only(service):
    service.generate("t1", "w1", "2025-03")
    service.lock("t1", "w1", "2025-03")
    paid = service.mark_paid("t1", "w1", "2025-03")

    assert paid.status == PayrollStatus.PAID
    with pytest.raises(ValidationError):
        service.lock("t1", "w1", "2025-03")


def test_transition_without_payroll_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.lock("t1", "w1", "2025-04")


def test_compliance_uses_configured_daily_limit(service):
    report = service.compliance("t1", "w1", "2025-03")

    assert report.compliant is False
    assert report.violations == ("Daily OT limit exceeded on 2025-03-05 (3.0 hrs)",)


def test_payroll_sheet_covers_active_workers_only(service, workers_repo, daily_worker):
    workers_repo.add(replace(daily_worker, worker_id="w2", name="Sunita"))
    workers_repo.add(replace(daily_worker, worker_id="w3", name="Left", status=WorkerStatus.INACTIVE))

    sheet = service.generate_for_tenant("t1", "2025-03")

    by_worker = {p.worker_id: p for p in sheet}
    assert set(by_worker) == {"w1", "w2"}
    assert by_worker["w2"].earnings.gross == 0
    assert by_worker["w2"].deductions.total == 100
    assert by_worker["w2"].net_payable == -100


def test_payroll_sheet_keeps_locked_months(service):
    service.generate("t1", "w1", "2025-03")
    locked = service.lock("t1", "w1", "2025-03")

    sheet = service.generate_for_tenant("t1", "2025-03")

    assert sheet == [locked]
