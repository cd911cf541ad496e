from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """Full day, on time or within the monthly late allowance."""

    def decide(self, *, net_hours: float, is_late: bool) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
