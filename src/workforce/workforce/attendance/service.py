from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional, Union

from ..common.datetime_utils import Clock, SystemClock, in_month, month_key
from ..core.constants import DEFAULT_PUNCH_COOLDOWN_SECONDS, KIOSK_DEVICE
from ..core.enums import AttendanceStatus, DisplayStatus, PunchType
from ..core.exceptions import ConcurrencyError, ConfigurationError, NotFoundError, ValidationError
from ..shifts.model import ShiftConfig
from ..shifts.repository import ShiftRepository
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from . import logic
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, GeoPoint, Punch
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        workers: WorkerRepository,
        shifts: ShiftRepository,
        *,
        clock: Optional[Clock] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        punch_cooldown_seconds: int = DEFAULT_PUNCH_COOLDOWN_SECONDS,
    ):
        self._attendance = attendance
        self._workers = workers
        self._shifts = shifts
        self._clock = clock or SystemClock()
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._cooldown = int(punch_cooldown_seconds)

    def _get_worker(self, tenant_id: str, worker_id: str) -> Worker:
        worker = self._workers.get_by_id(tenant_id, worker_id)
        if not worker:
            raise NotFoundError(f"Worker {worker_id} not found")
        return worker

    def _get_shift(self, worker: Worker) -> ShiftConfig:
        shift = self._shifts.get_by_id(worker.tenant_id, worker.shift_id) if worker.shift_id else None
        if not shift:
            raise ConfigurationError(f"No shift configured for worker {worker.worker_id}")
        return shift

    def _new_record(self, worker: Worker, work_date: date) -> AttendanceRecord:
        return AttendanceRecord(
            tenant_id=worker.tenant_id,
            worker_id=worker.worker_id,
            work_date=work_date,
            shift_id=worker.shift_id,
            worker_name=worker.name,
        )

    def _resolve(self, draft: AttendanceRecord, shift: ShiftConfig) -> AttendanceRecord:
        late_count = self.monthly_late_count(
            draft.tenant_id, draft.worker_id, month_key(draft.work_date), exclude_date=draft.work_date
        )
        return logic.process_daily_status(draft, shift, late_count, clock=self._clock, factory=self._factory)

    def _save(self, record: AttendanceRecord, *, expected_version: int) -> AttendanceRecord:
        try:
            return self._attendance.save(record, expected_version=expected_version)
        except ConcurrencyError:
            logger.warning("concurrent update on %s (version %d)", record.record_id, expected_version)
            raise

    def monthly_late_count(
        self,
        tenant_id: str,
        worker_id: str,
        month: str,
        *,
        exclude_date: Optional[date] = None,
    ) -> int:
        """Days flagged late this month, not counting `exclude_date`."""
        records = self._attendance.list_for_worker_month(tenant_id, worker_id, month)
        return sum(
            1
            for r in records
            if r.late_status.is_late and r.work_date != exclude_date and in_month(r.work_date, month)
        )

    def record_punch(
        self,
        tenant_id: str,
        worker_id: str,
        *,
        device: str = KIOSK_DEVICE,
        location: Optional[GeoPoint] = None,
        is_out_of_geofence: bool = False,
    ) -> AttendanceRecord:
        """Kiosk punch: toggles IN/OUT for today and re-resolves the day."""
        now = self._clock.now()
        today = now.date()

        worker = self._get_worker(tenant_id, worker_id)
        if not worker.is_active:
            raise ValidationError(f"Worker {worker_id} is inactive")
        shift = self._get_shift(worker)

        existing = self._attendance.get(tenant_id, worker_id, today)
        if existing and existing.status == AttendanceStatus.ON_LEAVE:
            raise ValidationError(f"{worker.name} is marked on leave today")

        last = existing.last_punch() if existing else None
        if last is not None:
            elapsed = (now - last.timestamp).total_seconds()
            if elapsed < self._cooldown:
                raise ValidationError(f"Wait {math.ceil(self._cooldown - elapsed)}s before punching again")

        base = existing or self._new_record(worker, today)
        punch = Punch(
            timestamp=now,
            type=logic.next_punch_type(base.timeline),
            device=device,
            location=location,
            is_out_of_geofence=is_out_of_geofence,
        )
        draft = replace(base, timeline=base.timeline + (punch,))

        resolved = self._resolve(draft, shift)
        saved = self._save(resolved, expected_version=existing.version if existing else 0)

        if is_out_of_geofence:
            logger.warning("%s punched %s outside the geofence on %s", worker.worker_id, punch.type.value, device)
        logger.info(
            "punch %s %s -> %s (net %.2fh)", saved.record_id, punch.type.value, saved.status.value, saved.hours.net
        )
        return saved

    def regulate(
        self,
        tenant_id: str,
        worker_id: str,
        work_date: date,
        punch_type: PunchType,
        new_time: Union[time, datetime],
    ) -> AttendanceRecord:
        """Admin correction of a missed punch; the whole day is recomputed."""
        worker = self._get_worker(tenant_id, worker_id)
        shift = self._get_shift(worker)

        existing = self._attendance.get(tenant_id, worker_id, work_date)
        if existing and existing.status == AttendanceStatus.ON_LEAVE:
            raise ValidationError("Cannot regulate punches on a leave day")

        base = existing or self._new_record(worker, work_date)
        late_count = self.monthly_late_count(tenant_id, worker_id, month_key(work_date), exclude_date=work_date)
        resolved = logic.regulate_punch(base, PunchType(punch_type), new_time, shift, late_count, clock=self._clock)

        saved = self._save(resolved, expected_version=existing.version if existing else 0)
        logger.info("regulated %s %s -> %s", saved.record_id, PunchType(punch_type).value, saved.status.value)
        return saved

    def mark_on_leave(self, tenant_id: str, worker_id: str, work_date: date) -> AttendanceRecord:
        worker = self._get_worker(tenant_id, worker_id)
        existing = self._attendance.get(tenant_id, worker_id, work_date)
        base = existing or self._new_record(worker, work_date)

        saved = self._save(logic.mark_on_leave(base), expected_version=existing.version if existing else 0)
        logger.info("marked %s on leave", saved.record_id)
        return saved

    def display_status(self, record: AttendanceRecord) -> DisplayStatus:
        return logic.display_status(record, self._clock.now().date())

    def month_records(self, tenant_id: str, worker_id: str, month: str) -> list[AttendanceRecord]:
        self._get_worker(tenant_id, worker_id)
        return list(self._attendance.list_for_worker_month(tenant_id, worker_id, month))
