from __future__ import annotations

import logging

from ...attendance.logic import last_out
from ...attendance.model import AttendanceRecord
from ...common.money import round2
from ...core.constants import (
    NIGHT_SHIFT_FROM_HOUR,
    NIGHT_SHIFT_UNTIL_HOUR,
    OVERTIME_MULTIPLIER,
    STANDARD_HOURS_PER_DAY,
)
from ...core.enums import AttendanceStatus, OvertimeRateMode
from ...workers.model import WageConfig, Worker
from ..model import DailyWageRecord, WageBreakdown, WageMeta
from .base import WageCalculator

logger = logging.getLogger(__name__)

_PAID_STATUSES = (AttendanceStatus.PRESENT, AttendanceStatus.HALF_DAY)


class StandardWageCalculator(WageCalculator):
    """Standard rule: full rate on PRESENT, half on HALF_DAY, double-time overtime."""

    @staticmethod
    def overtime_rate(config: WageConfig, daily_rate: float) -> float:
        """Configured per-hour rate when set, double the hourly rate otherwise.

        `DOUBLE_HOURLY` ignores a configured rate.
        """
        double_hourly = (daily_rate / STANDARD_HOURS_PER_DAY) * OVERTIME_MULTIPLIER
        if config.overtime_rate_mode == OvertimeRateMode.DOUBLE_HOURLY:
            return double_hourly
        if config.overtime_rate_per_hour and config.overtime_rate_per_hour > 0:
            return config.overtime_rate_per_hour
        if config.overtime_rate_mode == OvertimeRateMode.FLAT_OVERRIDE:
            logger.warning("FLAT_OVERRIDE overtime without overtime_rate_per_hour, paying double hourly")
        return double_hourly

    @staticmethod
    def is_night_checkout(record: AttendanceRecord) -> bool:
        out = last_out(record.timeline)
        if out is None:
            return False
        hour = out.timestamp.hour
        return hour >= NIGHT_SHIFT_FROM_HOUR or hour < NIGHT_SHIFT_UNTIL_HOUR

    def calculate_daily_wage(self, worker: Worker, record: AttendanceRecord) -> DailyWageRecord:
        config = worker.wage_config
        daily_rate = config.daily_rate()
        ot_hours = record.hours.overtime

        base_wage = 0.0
        if record.status == AttendanceStatus.PRESENT:
            base_wage = daily_rate
        elif record.status == AttendanceStatus.HALF_DAY:
            base_wage = daily_rate * 0.5

        overtime_wage = 0.0
        if config.overtime_eligible and ot_hours > 0:
            overtime_wage = ot_hours * self.overtime_rate(config, daily_rate)

        allowances = 0.0
        if record.status in _PAID_STATUSES:
            allowances += config.allowances.travel or 0
            allowances += config.allowances.food or 0
            if self.is_night_checkout(record):
                allowances += config.allowances.night_shift or 0

        total = base_wage + overtime_wage + allowances

        return DailyWageRecord(
            tenant_id=worker.tenant_id,
            worker_id=worker.worker_id,
            work_date=record.work_date,
            attendance_id=record.record_id,
            breakdown=WageBreakdown(
                base_wage=round2(base_wage),
                overtime_wage=round2(overtime_wage),
                allowances=round2(allowances),
                total=round2(total),
            ),
            meta=WageMeta(
                rate_used=round2(daily_rate),
                hours_worked=record.hours.net,
                overtime_hours=ot_hours,
                is_overtime_limit_exceeded=ot_hours > config.overtime_limit_hours,
            ),
        )
