from __future__ import annotations

from typing import Protocol, Sequence

from .model import Advance


class AdvanceRepository(Protocol):
    def list_for_worker(self, tenant_id: str, worker_id: str) -> Sequence[Advance]:
        raise NotImplementedError

    def create(self, advance: Advance) -> Advance:
        raise NotImplementedError
