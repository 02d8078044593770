from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import LeaveQuota


class LeaveQuotaRepository(Protocol):
    def list_all(self, *, employee_id: Optional[str] = None) -> Sequence[LeaveQuota]:
        raise NotImplementedError
