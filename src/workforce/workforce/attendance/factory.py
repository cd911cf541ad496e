from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import HALF_DAY_MIN_HOURS, PRESENT_MIN_HOURS
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_penalty_strategy import LatePenaltyStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Hour thresholds are fixed; only the late allowance comes from the shift.
    """

    half_day_min_hours: float = HALF_DAY_MIN_HOURS
    present_min_hours: float = PRESENT_MIN_HOURS

    def for_day(
        self,
        *,
        net_hours: float,
        is_late: bool,
        late_count_this_month: int,
        max_grace_allowed: int,
    ) -> AttendanceStrategy:
        if net_hours < self.half_day_min_hours:
            return AbsentStrategy()
        if net_hours < self.present_min_hours:
            return HalfDayStrategy()
        if is_late and late_count_this_month >= max_grace_allowed:
            return LatePenaltyStrategy()
        return PresentStrategy()
