from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import DEFAULT_OVERTIME_LIMIT_HOURS, DEFAULT_WORKING_DAYS_PER_MONTH
from ..core.enums import OvertimeRateMode, WageType, WorkerStatus


@dataclass(frozen=True)
class Allowances:
    """Flat per-day amounts, paid only on PRESENT or HALF_DAY days."""

    travel: float = 0.0
    food: float = 0.0
    night_shift: float = 0.0


@dataclass(frozen=True)
class WageConfig:
    type: WageType
    amount: float
    overtime_eligible: bool = False
    overtime_rate_per_hour: Optional[float] = None
    working_days_per_month: int = DEFAULT_WORKING_DAYS_PER_MONTH
    allowances: Allowances = field(default_factory=Allowances)
    # None: use overtime_rate_per_hour when set, else double hourly
    overtime_rate_mode: Optional[OvertimeRateMode] = None
    overtime_limit_hours: float = DEFAULT_OVERTIME_LIMIT_HOURS

    def effective_working_days(self) -> int:
        return self.working_days_per_month or DEFAULT_WORKING_DAYS_PER_MONTH

    def daily_rate(self) -> float:
        if self.type == WageType.MONTHLY:
            return self.amount / self.effective_working_days()
        return self.amount


@dataclass(frozen=True)
class Worker:
    """Domain entity: a registered factory worker (face data lives elsewhere)."""

    worker_id: str
    tenant_id: str
    name: str
    shift_id: str
    wage_config: WageConfig
    designation: str = ""
    department: str = ""
    status: WorkerStatus = WorkerStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == WorkerStatus.ACTIVE
