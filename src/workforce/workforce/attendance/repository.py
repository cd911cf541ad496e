from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get(self, tenant_id: str, worker_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_worker_month(self, tenant_id: str, worker_id: str, month: str) -> Sequence[AttendanceRecord]:
        """Records of one worker whose work_date falls in `month` (YYYY-MM), oldest first."""

        raise NotImplementedError

    def save(self, record: AttendanceRecord, *, expected_version: int) -> AttendanceRecord:
        """Insert (expected_version == 0) or update the stored copy.

        Raises ConcurrencyError when the stored version differs from
        `expected_version`. Returns the record carrying its new version.
        """

        raise NotImplementedError
