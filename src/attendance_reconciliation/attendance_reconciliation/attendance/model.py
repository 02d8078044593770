from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import ClockType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's clock events for one day.

    Times are local HH:MM strings. The same type carries effective attendance:
    `clock_in_correction_id` / `clock_out_correction_id` name the approved
    correction that supplied a value, and a placeholder synthesized from
    corrections alone has no `record_id`.
    """

    record_id: Optional[str]
    employee_id: str
    work_date: date
    shift_code: Optional[str] = None
    clock_in_time: Optional[str] = None
    clock_out_time: Optional[str] = None
    clock_in_location_type: Optional[str] = None
    clock_out_location_type: Optional[str] = None
    clock_in_correction_id: Optional[str] = None
    clock_out_correction_id: Optional[str] = None

    @property
    def is_placeholder(self) -> bool:
        return self.record_id is None

    @property
    def is_corrected(self) -> bool:
        return bool(self.clock_in_correction_id or self.clock_out_correction_id)

    @property
    def has_any_clock(self) -> bool:
        return bool(self.clock_in_time or self.clock_out_time)

    def source_of(self, clock_type: ClockType) -> Optional[str]:
        """Id of the record that supplied the given clock value."""
        if clock_type == ClockType.IN:
            return self.clock_in_correction_id or self.record_id
        return self.clock_out_correction_id or self.record_id


EffectiveAttendance = AttendanceRecord
