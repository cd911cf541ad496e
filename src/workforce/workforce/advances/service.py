from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_key
from ..common.money import round2
from ..common.validators import require_positive
from ..core.enums import AdvanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..payroll.aggregator import approved_advances_in_month, calculate_current_earnings
from ..payroll.calculator.base import WageCalculator
from ..payroll.calculator.standard_calculator import StandardWageCalculator
from ..workers.repository import WorkerRepository
from .model import Advance
from .repository import AdvanceRepository

logger = logging.getLogger(__name__)


class AdvanceService:
    def __init__(
        self,
        advances: AdvanceRepository,
        attendance: AttendanceRepository,
        workers: WorkerRepository,
        *,
        calculator: Optional[WageCalculator] = None,
    ):
        self._advances = advances
        self._attendance = attendance
        self._workers = workers
        self._calculator = calculator or StandardWageCalculator()

    def available_balance(self, tenant_id: str, worker_id: str, month: str) -> float:
        """Earned so far this month minus advances already approved."""
        worker = self._workers.get_by_id(tenant_id, worker_id)
        if not worker:
            raise NotFoundError(f"Worker {worker_id} not found")

        records = self._attendance.list_for_worker_month(tenant_id, worker_id, month)
        earned = calculate_current_earnings(worker, month, records, calculator=self._calculator)
        existing = self._advances.list_for_worker(tenant_id, worker_id)
        taken = sum(a.amount for a in approved_advances_in_month(worker, month, existing))
        return round2(earned - taken)

    def issue(
        self,
        tenant_id: str,
        worker_id: str,
        *,
        amount: float,
        advance_date: date,
        reason: str = "",
    ) -> Advance:
        amount = require_positive(amount, "Advance amount")

        balance = self.available_balance(tenant_id, worker_id, month_key(advance_date))
        if amount > balance:
            raise ValidationError(f"Advance {amount:.2f} exceeds earned balance {balance:.2f}")

        advance = Advance(
            advance_id=uuid.uuid4().hex,
            tenant_id=tenant_id,
            worker_id=worker_id,
            amount=round2(amount),
            advance_date=advance_date,
            reason=(reason or "").strip(),
            status=AdvanceStatus.APPROVED,
        )
        created = self._advances.create(advance)
        logger.info("advance %.2f issued to %s on %s", created.amount, worker_id, advance_date.isoformat())
        return created
