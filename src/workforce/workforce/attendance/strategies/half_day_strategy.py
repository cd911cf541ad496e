from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class HalfDayStrategy(AttendanceStrategy):
    """Worked at least the half-day minimum but less than a full day."""

    def decide(self, *, net_hours: float, is_late: bool) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALF_DAY)
