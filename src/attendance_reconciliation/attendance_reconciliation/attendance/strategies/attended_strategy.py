from __future__ import annotations

from typing import Optional

from ...core.enums import DayStatus
from ...requests.model import LeaveRequest
from ...schedules.resolver import is_working_shift
from ..model import AttendanceRecord
from .base import DayStatusStrategy, StatusDecision


class AttendedStrategy(DayStatusStrategy):
    """At least one clock event exists (raw or corrected)."""

    def decide(
        self,
        *,
        shift_code: str,
        attendance: Optional[AttendanceRecord],
        leave: Optional[LeaveRequest],
    ) -> StatusDecision:
        note = None if is_working_shift(shift_code) else "Masuk di hari OFF"
        if attendance and attendance.clock_in_time and attendance.clock_out_time:
            return StatusDecision(status=DayStatus.PRESENT, note=note)
        if attendance and not attendance.clock_out_time:
            return StatusDecision(status=DayStatus.INCOMPLETE, note=note or "Belum clock-out")
        return StatusDecision(status=DayStatus.INCOMPLETE, note=note or "Tanpa clock-in")
