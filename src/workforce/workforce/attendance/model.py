from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, PunchType


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class Punch:
    """One check-in/check-out event recorded by a kiosk or an administrator."""

    timestamp: datetime
    type: PunchType
    device: str
    location: Optional[GeoPoint] = None
    is_out_of_geofence: bool = False


@dataclass(frozen=True)
class LateStatus:
    is_late: bool = False
    late_by_mins: int = 0
    penalty_applied: bool = False


@dataclass(frozen=True)
class WorkedHours:
    gross: float = 0.0
    net: float = 0.0
    overtime: float = 0.0


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one worker's attendance for one calendar date.

    Identity is (tenant_id, worker_id, work_date). `hours` and `late_status`
    are derived from `timeline`; never set them directly, re-run the
    resolver instead. `version` is the optimistic-concurrency token of the
    stored copy (0 = not stored yet).
    """

    tenant_id: str
    worker_id: str
    work_date: date
    shift_id: str
    timeline: tuple[Punch, ...] = ()
    status: AttendanceStatus = AttendanceStatus.ABSENT
    late_status: LateStatus = field(default_factory=LateStatus)
    hours: WorkedHours = field(default_factory=WorkedHours)
    worker_name: str = ""
    version: int = 0

    @property
    def record_id(self) -> str:
        return record_id_for(self.tenant_id, self.worker_id, self.work_date)

    def last_punch(self) -> Optional[Punch]:
        if not self.timeline:
            return None
        return max(self.timeline, key=lambda p: p.timestamp)


def record_id_for(tenant_id: str, worker_id: str, work_date: date) -> str:
    return f"{tenant_id}_{worker_id}_{work_date.isoformat()}"
