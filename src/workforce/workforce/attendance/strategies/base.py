from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    penalty_applied: bool = False
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide a daily attendance status."""

    @abstractmethod
    def decide(self, *, net_hours: float, is_late: bool) -> StatusDecision:
        raise NotImplementedError
