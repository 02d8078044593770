from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import parse_clock_time
from ..core.constants import HOURS_DECIMALS
from ..core.enums import RequestStatus
from ..requests.model import OvertimeRequest

_DAY_SECONDS = 24 * 3600


def overtime_window_hours(start: str, end: str, *, record_id: Optional[str] = None) -> float:
    """Hours between two HH:MM clock values; an end before the start runs past midnight."""
    s = parse_clock_time(start, record_id=record_id, field="start_time")
    e = parse_clock_time(end, record_id=record_id, field="end_time")
    start_s = s.hour * 3600 + s.minute * 60 + s.second
    end_s = e.hour * 3600 + e.minute * 60 + e.second
    if end_s < start_s:
        end_s += _DAY_SECONDS
    return round((end_s - start_s) / 3600, HOURS_DECIMALS)


def request_hours(request: OvertimeRequest) -> float:
    """Recorded hours, or the window length when only a window was filed."""
    if request.hours:
        return float(request.hours)
    if request.start_time and request.end_time:
        return overtime_window_hours(request.start_time, request.end_time, record_id=request.request_id)
    return 0.0


def approved_overtime(
    requests: Iterable[OvertimeRequest],
    *,
    employee_id: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[OvertimeRequest]:
    out = []
    for r in requests:
        if r.status != RequestStatus.APPROVED:
            continue
        if employee_id is not None and str(r.employee_id) != str(employee_id):
            continue
        if start is not None and r.overtime_date < start:
            continue
        if end is not None and r.overtime_date > end:
            continue
        out.append(r)
    return out


def overtime_hours_for_day(requests: Iterable[OvertimeRequest], employee_id: str, day: date) -> float:
    total = sum(request_hours(r) for r in approved_overtime(requests, employee_id=employee_id, start=day, end=day))
    return round(total, HOURS_DECIMALS)
