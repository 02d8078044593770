from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class ScheduleEntry:
    """Domain entity: the shift assigned to one employee on one day."""

    employee_id: str
    work_date: date
    shift_code: str
    entry_id: Optional[str] = None
