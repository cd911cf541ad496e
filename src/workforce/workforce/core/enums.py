from __future__ import annotations

from enum import Enum


class PunchType(str, Enum):
    IN = "IN"
    OUT = "OUT"


class AttendanceStatus(str, Enum):
    """Persisted daily attendance status."""

    PRESENT = "PRESENT"
    HALF_DAY = "HALF_DAY"
    ABSENT = "ABSENT"
    ON_LEAVE = "ON_LEAVE"


class DisplayStatus(str, Enum):
    """Presentation-only status: adds PENDING for a day still in progress."""

    PRESENT = "PRESENT"
    HALF_DAY = "HALF_DAY"
    ABSENT = "ABSENT"
    ON_LEAVE = "ON_LEAVE"
    PENDING = "PENDING"


class WageType(str, Enum):
    DAILY = "DAILY"
    MONTHLY = "MONTHLY"


class OvertimeRateMode(str, Enum):
    """How the overtime hourly rate is derived."""

    DOUBLE_HOURLY = "DOUBLE_HOURLY"
    FLAT_OVERRIDE = "FLAT_OVERRIDE"


class WorkerStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class AdvanceStatus(str, Enum):
    APPROVED = "APPROVED"
    PENDING = "PENDING"
    REPAID = "REPAID"


class PayrollStatus(str, Enum):
    """Payroll workflow: DRAFT -> LOCKED -> PAID (admin actions only)."""

    DRAFT = "DRAFT"
    LOCKED = "LOCKED"
    PAID = "PAID"
