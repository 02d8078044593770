from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_range(self, *, start: date, end: date, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        """Raw clock records (corrections not applied)."""

        raise NotImplementedError
