from __future__ import annotations

from typing import Optional

from ...core.enums import DayStatus
from ...requests.model import LeaveRequest
from ..model import AttendanceRecord
from .base import DayStatusStrategy, StatusDecision


class AbsentStrategy(DayStatusStrategy):
    """Scheduled working day without any clock event or leave."""

    def decide(
        self,
        *,
        shift_code: str,
        attendance: Optional[AttendanceRecord],
        leave: Optional[LeaveRequest],
    ) -> StatusDecision:
        return StatusDecision(status=DayStatus.ABSENT, note=shift_code)
