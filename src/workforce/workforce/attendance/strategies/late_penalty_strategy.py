from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LatePenaltyStrategy(AttendanceStrategy):
    """Full day worked, but late after the monthly allowance is used up."""

    def decide(self, *, net_hours: float, is_late: bool) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.HALF_DAY,
            penalty_applied=True,
            note="Late arrival allowance exhausted",
        )
