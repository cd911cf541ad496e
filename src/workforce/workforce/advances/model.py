from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import AdvanceStatus


@dataclass(frozen=True)
class Advance:
    """Cash advance (kharchi) against future wages."""

    advance_id: str
    tenant_id: str
    worker_id: str
    amount: float
    advance_date: date
    reason: str = ""
    status: AdvanceStatus = AdvanceStatus.PENDING
