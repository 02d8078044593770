from __future__ import annotations

from typing import Optional

from ...core.enums import DayStatus, RequestKind
from ...requests.model import LeaveRequest
from ..model import AttendanceRecord
from .base import DayStatusStrategy, StatusDecision


class LeaveStrategy(DayStatusStrategy):
    """Approved leave covers the day; takes precedence over clock events."""

    def decide(
        self,
        *,
        shift_code: str,
        attendance: Optional[AttendanceRecord],
        leave: Optional[LeaveRequest],
    ) -> StatusDecision:
        if leave is not None and leave.leave_type == RequestKind.SICK_LEAVE:
            return StatusDecision(status=DayStatus.SICK_LEAVE, note=leave.leave_type.value)
        return StatusDecision(status=DayStatus.ON_LEAVE, note=leave.leave_type.value if leave else None)
