from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..requests.model import LeaveRequest
from ..schedules.resolver import is_working_shift
from .model import AttendanceRecord
from .strategies.absent_strategy import AbsentStrategy
from .strategies.attended_strategy import AttendedStrategy
from .strategies.base import DayStatusStrategy
from .strategies.leave_strategy import LeaveStrategy
from .strategies.off_strategy import OffDayStrategy


@dataclass
class DayStatusStrategyFactory:
    """Factory Pattern: choose the day-status strategy.

    Precedence: approved leave, then clock events, then OFF, then absent.
    """

    def for_day(
        self,
        *,
        shift_code: str,
        attendance: Optional[AttendanceRecord],
        leave: Optional[LeaveRequest],
    ) -> DayStatusStrategy:
        if leave is not None:
            return LeaveStrategy()
        if attendance is not None and attendance.has_any_clock:
            return AttendedStrategy()
        if not is_working_shift(shift_code):
            return OffDayStrategy()
        return AbsentStrategy()

    def decide(
        self,
        *,
        shift_code: str,
        attendance: Optional[AttendanceRecord],
        leave: Optional[LeaveRequest],
    ):
        strategy = self.for_day(shift_code=shift_code, attendance=attendance, leave=leave)
        return strategy.decide(shift_code=shift_code, attendance=attendance, leave=leave)
