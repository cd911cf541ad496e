from __future__ import annotations

from abc import ABC, abstractmethod

from ...attendance.model import AttendanceRecord
from ...workers.model import Worker
from ..model import DailyWageRecord


class WageCalculator(ABC):
    """Calculator interface (Strategy Pattern for daily pay)."""

    @abstractmethod
    def calculate_daily_wage(self, worker: Worker, record: AttendanceRecord) -> DailyWageRecord:
        raise NotImplementedError
