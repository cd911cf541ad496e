from __future__ import annotations

from typing import Optional, Protocol

from .model import DailyWageRecord, MonthlyPayroll


class DailyWageRepository(Protocol):
    def save(self, wage: DailyWageRecord) -> None:
        raise NotImplementedError


class PayrollRepository(Protocol):
    def get(self, tenant_id: str, worker_id: str, month: str) -> Optional[MonthlyPayroll]:
        raise NotImplementedError

    def save(self, payroll: MonthlyPayroll) -> None:
        raise NotImplementedError
