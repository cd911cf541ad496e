from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from ..core.constants import (
    DEFAULT_BREAK_DURATION_MINS,
    DEFAULT_GRACE_PERIOD_MINS,
    DEFAULT_MAX_GRACE_ALLOWED,
    DEFAULT_MIN_OVERTIME_MINS,
)


@dataclass(frozen=True)
class ShiftConfig:
    """Domain entity: a named work schedule configured by an administrator.

    `end_time` may be earlier than `start_time` for a shift that runs past
    midnight.
    """

    shift_id: str
    name: str
    start_time: time
    end_time: time
    grace_period_mins: int = DEFAULT_GRACE_PERIOD_MINS
    max_grace_allowed: int = DEFAULT_MAX_GRACE_ALLOWED
    break_duration_mins: int = DEFAULT_BREAK_DURATION_MINS
    min_overtime_mins: int = DEFAULT_MIN_OVERTIME_MINS

    def duration_hours(self) -> float:
        start = self.start_time.hour * 60 + self.start_time.minute
        end = self.end_time.hour * 60 + self.end_time.minute
        minutes = end - start
        if minutes < 0:
            minutes += 24 * 60
        return minutes / 60

    def start_on(self, moment: datetime) -> datetime:
        """Nominal shift start on the same calendar day as `moment`."""
        return moment.replace(hour=self.start_time.hour, minute=self.start_time.minute, second=0, microsecond=0)
