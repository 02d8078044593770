from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...attendance.model import AttendanceRecord


class WorkedHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def worked_hours(self, record: Optional[AttendanceRecord]) -> Optional[float]:
        raise NotImplementedError
