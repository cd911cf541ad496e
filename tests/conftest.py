from __future__ import annotations

from dataclasses import replace
from datetime import date, time
from typing import Optional

import pytest

from src.workforce.workforce.advances.model import Advance
from src.workforce.workforce.attendance.model import AttendanceRecord
from src.workforce.workforce.common.datetime_utils import in_month
from src.workforce.workforce.core.enums import WageType
from src.workforce.workforce.core.exceptions import ConcurrencyError
from src.workforce.workforce.payroll.model import DailyWageRecord, MonthlyPayroll
from src.workforce.workforce.shifts.model import ShiftConfig
from src.workforce.workforce.workers.model import Allowances, WageConfig, Worker


class InMemoryWorkers:
    def __init__(self, *workers: Worker):
        self._by_id = {(w.tenant_id, w.worker_id): w for w in workers}

    def get_by_id(self, tenant_id: str, worker_id: str) -> Optional[Worker]:
        return self._by_id.get((tenant_id, worker_id))

    def list_active(self, tenant_id: str):
        return [w for (t, _), w in self._by_id.items() if t == tenant_id and w.is_active]

    def add(self, worker: Worker) -> None:
        self._by_id[(worker.tenant_id, worker.worker_id)] = worker


class InMemoryShifts:
    def __init__(self, *shifts: ShiftConfig, tenant_id: str = "t1"):
        self._by_id = {(tenant_id, s.shift_id): s for s in shifts}

    def get_by_id(self, tenant_id: str, shift_id: str) -> Optional[ShiftConfig]:
        return self._by_id.get((tenant_id, shift_id))


class InMemoryAttendance:
    """Versioned store behaving like the MySQL repository."""

    def __init__(self):
        self._by_key: dict[tuple[str, str, date], AttendanceRecord] = {}

    def get(self, tenant_id: str, worker_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((tenant_id, worker_id, work_date))

    def list_for_worker_month(self, tenant_id: str, worker_id: str, month: str):
        items = [
            r
            for (t, w, d), r in self._by_key.items()
            if t == tenant_id and w == worker_id and in_month(d, month)
        ]
        return sorted(items, key=lambda r: r.work_date)

    def save(self, record: AttendanceRecord, *, expected_version: int) -> AttendanceRecord:
        key = (record.tenant_id, record.worker_id, record.work_date)
        stored = self._by_key.get(key)
        current = stored.version if stored else 0
        if current != expected_version:
            raise ConcurrencyError(f"{record.record_id} changed since version {expected_version}")
        saved = replace(record, version=current + 1)
        self._by_key[key] = saved
        return saved

    def put(self, record: AttendanceRecord) -> AttendanceRecord:
        """Seed a stored record directly."""
        saved = replace(record, version=max(record.version, 1))
        self._by_key[(record.tenant_id, record.worker_id, record.work_date)] = saved
        return saved


class InMemoryWages:
    def __init__(self):
        self.saved: dict[str, DailyWageRecord] = {}

    def save(self, wage: DailyWageRecord) -> None:
        self.saved[wage.record_id] = wage


class InMemoryPayrolls:
    def __init__(self):
        self._by_key: dict[tuple[str, str, str], MonthlyPayroll] = {}

    def get(self, tenant_id: str, worker_id: str, month: str) -> Optional[MonthlyPayroll]:
        return self._by_key.get((tenant_id, worker_id, month))

    def save(self, payroll: MonthlyPayroll) -> None:
        self._by_key[(payroll.tenant_id, payroll.worker_id, payroll.month)] = payroll


class InMemoryAdvances:
    def __init__(self, *advances: Advance):
        self.items = list(advances)

    def list_for_worker(self, tenant_id: str, worker_id: str):
        return [a for a in self.items if a.tenant_id == tenant_id and a.worker_id == worker_id]

    def create(self, advance: Advance) -> Advance:
        self.items.append(advance)
        return advance


@pytest.fixture
def general_shift() -> ShiftConfig:
    return ShiftConfig(
        shift_id="general",
        name="General",
        start_time=time(9, 0),
        end_time=time(18, 0),
        grace_period_mins=15,
        max_grace_allowed=3,
    )


@pytest.fixture
def daily_worker() -> Worker:
    return Worker(
        worker_id="w1",
        tenant_id="t1",
        name="Ramesh",
        shift_id="general",
        wage_config=WageConfig(
            type=WageType.DAILY,
            amount=600,
            overtime_eligible=True,
            allowances=Allowances(travel=50, food=30, night_shift=100),
        ),
        designation="Helper",
        department="Assembly",
    )


@pytest.fixture
def workers_repo(daily_worker) -> InMemoryWorkers:
    return InMemoryWorkers(daily_worker)


@pytest.fixture
def shifts_repo(general_shift) -> InMemoryShifts:
    return InMemoryShifts(general_shift)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def wages_repo() -> InMemoryWages:
    return InMemoryWages()


@pytest.fixture
def payrolls_repo() -> InMemoryPayrolls:
    return InMemoryPayrolls()


@pytest.fixture
def advances_repo() -> InMemoryAdvances:
    return InMemoryAdvances()
