from __future__ import annotations

from typing import Optional

from .base import WorkedHoursCalculator
from ...attendance.model import AttendanceRecord
from ...common.datetime_utils import hours_between, parse_clock_time
from ...core.enums import ClockType


class StandardWorkedHoursCalculator(WorkedHoursCalculator):
    """Standard rule: out - in, in hours, same day, not clamped.

    None unless both clock values are present. Unparseable values raise
    MalformedTimeValue naming the record that supplied them.
    """

    def worked_hours(self, record: Optional[AttendanceRecord]) -> Optional[float]:
        if record is None or not record.clock_in_time or not record.clock_out_time:
            return None
        clock_in = parse_clock_time(
            record.clock_in_time, record_id=record.source_of(ClockType.IN), field="clock_in_time"
        )
        clock_out = parse_clock_time(
            record.clock_out_time, record_id=record.source_of(ClockType.OUT), field="clock_out_time"
        )
        return hours_between(clock_in, clock_out)
