"""Attendance resolver: punches -> hours, lateness, overtime and daily status.

Everything here is pure. The only ambient input is the clock, read when a
worker is still clocked in so that an in-progress day's hours keep growing.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, time
from typing import Iterable, Optional, Union

from ..common.datetime_utils import Clock, SystemClock
from ..common.money import round2
from ..core.constants import (
    DEFAULT_GRACE_PERIOD_MINS,
    DEFAULT_MAX_GRACE_ALLOWED,
    DEFAULT_MIN_OVERTIME_MINS,
    MANUAL_OVERRIDE_DEVICE,
)
from ..core.enums import AttendanceStatus, DisplayStatus, PunchType
from ..shifts.model import ShiftConfig
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, LateStatus, Punch, WorkedHours

logger = logging.getLogger(__name__)

_DEFAULT_FACTORY = AttendanceStrategyFactory()


def _sorted(timeline: Iterable[Punch]) -> list[Punch]:
    return sorted(timeline, key=lambda p: p.timestamp)


def calculate_hours(timeline: Iterable[Punch], *, clock: Optional[Clock] = None) -> float:
    """Sum of IN->OUT segments in hours.

    A second IN while one is open is ignored, an OUT without an open IN
    adds nothing, and a trailing open IN counts up to now. Each segment is
    clamped at zero so a skewed pair never reduces the total.
    """
    total_seconds = 0.0
    open_in: Optional[datetime] = None

    for punch in _sorted(timeline):
        if punch.type == PunchType.IN:
            if open_in is None:
                open_in = punch.timestamp
        elif punch.type == PunchType.OUT and open_in is not None:
            total_seconds += max(0.0, (punch.timestamp - open_in).total_seconds())
            open_in = None

    if open_in is not None:
        now = (clock or SystemClock()).now()
        total_seconds += max(0.0, (now - open_in).total_seconds())

    return total_seconds / 3600


def first_in(timeline: Iterable[Punch]) -> Optional[Punch]:
    for punch in _sorted(timeline):
        if punch.type == PunchType.IN:
            return punch
    return None


def last_out(timeline: Iterable[Punch]) -> Optional[Punch]:
    for punch in reversed(_sorted(timeline)):
        if punch.type == PunchType.OUT:
            return punch
    return None


def lateness(first_punch: Punch, shift: ShiftConfig) -> tuple[bool, int]:
    """(is_late, late_by_mins) of a first check-in against the shift start."""
    shift_start = shift.start_on(first_punch.timestamp)
    late_by_mins = max(0, int((first_punch.timestamp - shift_start).total_seconds() // 60))
    grace = shift.grace_period_mins if shift.grace_period_mins is not None else DEFAULT_GRACE_PERIOD_MINS
    return late_by_mins > grace, late_by_mins


def overtime_hours(net_hours: float, shift: ShiftConfig) -> float:
    extra = max(0.0, net_hours - shift.duration_hours())
    min_overtime_mins = shift.min_overtime_mins if shift.min_overtime_mins is not None else DEFAULT_MIN_OVERTIME_MINS
    if extra >= min_overtime_mins / 60:
        return extra
    return 0.0


def process_daily_status(
    record: AttendanceRecord,
    shift: ShiftConfig,
    late_count_this_month: int,
    *,
    clock: Optional[Clock] = None,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> AttendanceRecord:
    """Resolve status, lateness and hours of a draft record.

    `late_count_this_month` must exclude the day being processed. The
    timeline is passed through unchanged.
    """
    first = first_in(record.timeline)
    if first is None:
        return replace(
            record,
            status=AttendanceStatus.ABSENT,
            late_status=LateStatus(),
            hours=WorkedHours(),
        )

    is_late, late_by_mins = lateness(first, shift)
    net_hours = calculate_hours(record.timeline, clock=clock)

    max_grace_allowed = shift.max_grace_allowed or DEFAULT_MAX_GRACE_ALLOWED
    strategy = (factory or _DEFAULT_FACTORY).for_day(
        net_hours=net_hours,
        is_late=is_late,
        late_count_this_month=late_count_this_month,
        max_grace_allowed=max_grace_allowed,
    )
    decision = strategy.decide(net_hours=net_hours, is_late=is_late)
    if decision.penalty_applied:
        logger.debug("late penalty for %s (late count %d)", record.record_id, late_count_this_month)

    return replace(
        record,
        status=decision.status,
        late_status=LateStatus(
            is_late=is_late,
            late_by_mins=late_by_mins,
            penalty_applied=decision.penalty_applied,
        ),
        hours=WorkedHours(
            gross=net_hours,
            net=round2(net_hours),
            overtime=round2(overtime_hours(net_hours, shift)),
        ),
    )


def next_punch_type(timeline: Iterable[Punch]) -> PunchType:
    """Kiosk toggling: IN on an empty day or after an OUT, otherwise OUT."""
    ordered = _sorted(timeline)
    if ordered and ordered[-1].type == PunchType.IN:
        return PunchType.OUT
    return PunchType.IN


def replace_punch(
    timeline: Iterable[Punch],
    punch_type: PunchType,
    timestamp: datetime,
    *,
    device: str = MANUAL_OVERRIDE_DEVICE,
) -> tuple[Punch, ...]:
    """Replace the first IN (or last OUT) with a manual punch; append if missing."""
    ordered = _sorted(timeline)
    manual = Punch(timestamp=timestamp, type=punch_type, device=device)

    target = first_in(ordered) if punch_type == PunchType.IN else last_out(ordered)
    if target is None:
        ordered.append(manual)
    else:
        ordered[ordered.index(target)] = manual
    return tuple(_sorted(ordered))


def regulate_punch(
    record: AttendanceRecord,
    punch_type: PunchType,
    new_time: Union[time, datetime],
    shift: ShiftConfig,
    late_count_this_month: int,
    *,
    clock: Optional[Clock] = None,
) -> AttendanceRecord:
    """Administrative correction of a missed/wrong punch, then full re-resolve.

    A bare time is placed on the record's own date.
    """
    if isinstance(new_time, datetime):
        timestamp = new_time
    else:
        timestamp = datetime.combine(record.work_date, new_time)

    draft = replace(record, timeline=replace_punch(record.timeline, punch_type, timestamp))
    return process_daily_status(draft, shift, late_count_this_month, clock=clock)


def mark_on_leave(record: AttendanceRecord) -> AttendanceRecord:
    """Leave override: bypasses the resolver and clears derived fields."""
    return replace(
        record,
        status=AttendanceStatus.ON_LEAVE,
        late_status=LateStatus(),
        hours=WorkedHours(),
    )


def display_status(record: AttendanceRecord, today: date) -> DisplayStatus:
    """Status for screens; PENDING means today's shift is still open."""
    if record.status != AttendanceStatus.ON_LEAVE and record.work_date == today:
        ordered = _sorted(record.timeline)
        if ordered and ordered[-1].type == PunchType.IN:
            return DisplayStatus.PENDING
    return DisplayStatus(record.status.value)
