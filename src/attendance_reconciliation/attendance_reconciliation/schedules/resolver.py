from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Union

from ..common.datetime_utils import as_day, iter_days
from ..core.constants import OFF_SHIFT_CODE
from .model import ScheduleEntry


def is_working_shift(shift_code: str | None) -> bool:
    """Blank codes count as unscheduled, which is the same as OFF."""
    code = (shift_code or "").strip()
    return bool(code) and code.upper() != OFF_SHIFT_CODE


class ScheduleResolver:
    """Looks up the scheduled shift of an employee for a calendar day.

    An unscheduled day resolves to OFF, exactly like an explicit day off.
    Later entries for the same (employee, day) replace earlier ones.
    """

    def __init__(self, entries: Iterable[ScheduleEntry] = ()):
        self._by_key: dict[tuple[str, date], str] = {}
        for e in entries:
            self._by_key[(str(e.employee_id), as_day(e.work_date))] = e.shift_code

    def resolve_shift(self, employee_id: str, work_date: Union[date, datetime]) -> str:
        code = (self._by_key.get((str(employee_id), as_day(work_date))) or "").strip()
        return code or OFF_SHIFT_CODE

    def is_working_day(self, employee_id: str, work_date: Union[date, datetime]) -> bool:
        return is_working_shift(self.resolve_shift(employee_id, work_date))

    def working_days(self, employee_id: str, start: date, end: date) -> list[date]:
        return [d for d in iter_days(start, end) if self.is_working_day(employee_id, d)]


def resolve_shift(entries: Iterable[ScheduleEntry], employee_id: str, work_date: Union[date, datetime]) -> str:
    return ScheduleResolver(entries).resolve_shift(employee_id, work_date)
