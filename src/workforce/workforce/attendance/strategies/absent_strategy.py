from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """Too few hours worked (or no check-in at all)."""

    def decide(self, *, net_hours: float, is_late: bool) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT)
