from __future__ import annotations

from typing import Optional, Protocol

from .model import ShiftConfig


class ShiftRepository(Protocol):
    def get_by_id(self, tenant_id: str, shift_id: str) -> Optional[ShiftConfig]:
        raise NotImplementedError
