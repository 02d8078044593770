from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import ScheduleEntry


class ScheduleRepository(Protocol):
    def list_range(self, *, start: date, end: date, employee_id: Optional[str] = None) -> Sequence[ScheduleEntry]:
        raise NotImplementedError
