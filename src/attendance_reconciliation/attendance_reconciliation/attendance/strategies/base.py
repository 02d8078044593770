from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import DayStatus
from ...requests.model import LeaveRequest
from ..model import AttendanceRecord


@dataclass(frozen=True)
class StatusDecision:
    status: DayStatus
    note: Optional[str] = None


class DayStatusStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide the badge of one day."""

    @abstractmethod
    def decide(
        self,
        *,
        shift_code: str,
        attendance: Optional[AttendanceRecord],
        leave: Optional[LeaveRequest],
    ) -> StatusDecision:
        raise NotImplementedError
