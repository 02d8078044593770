"""Leave-day counting and balances.

Leave is charged only on scheduled working days: a day inside a leave range
whose shift resolves to OFF (including unscheduled days) costs nothing.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence, Union

from ..core.enums import RequestKind, RequestStatus
from ..requests.model import LeaveRequest
from ..schedules.model import ScheduleEntry
from ..schedules.resolver import ScheduleResolver
from ..users.model import Employee
from .model import LeaveQuota, LeaveQuotaRow

Schedules = Union[ScheduleResolver, Iterable[ScheduleEntry]]


def as_resolver(schedules: Schedules) -> ScheduleResolver:
    if isinstance(schedules, ScheduleResolver):
        return schedules
    return ScheduleResolver(schedules)


def count_leave_days(start: date, end: date, schedules: Schedules, employee_id: str) -> int:
    """Chargeable days of a (prospective) leave from start to end inclusive."""
    if end < start:
        return 0
    return len(as_resolver(schedules).working_days(employee_id, start, end))


def leave_days_consumed(
    request: LeaveRequest,
    schedules: Schedules,
    *,
    window_start: Optional[date] = None,
    window_end: Optional[date] = None,
) -> int:
    start = max(request.start_date, window_start) if window_start else request.start_date
    end = min(request.end_date, window_end) if window_end else request.end_date
    return count_leave_days(start, end, schedules, request.employee_id)


def total_leave_days_consumed(
    leave_requests: Iterable[LeaveRequest],
    schedules: Schedules,
    employee_id: str,
    start: date,
    end: date,
    *,
    leave_types: Optional[Iterable[RequestKind]] = None,
) -> int:
    resolver = as_resolver(schedules)
    kinds = frozenset(leave_types) if leave_types is not None else None
    total = 0
    for r in leave_requests:
        if r.status != RequestStatus.APPROVED or str(r.employee_id) != str(employee_id):
            continue
        if kinds is not None and r.leave_type not in kinds:
            continue
        if r.end_date < start or r.start_date > end:
            continue
        total += leave_days_consumed(r, resolver, window_start=start, window_end=end)
    return total


def annual_leave_taken(
    employee_id: str,
    leave_requests: Iterable[LeaveRequest],
    schedules: Schedules,
    year: int,
) -> int:
    """Days charged by approved annual leave starting in `year` (each counted over its full range)."""
    resolver = as_resolver(schedules)
    return sum(
        leave_days_consumed(r, resolver)
        for r in leave_requests
        if r.status == RequestStatus.APPROVED
        and r.leave_type == RequestKind.ANNUAL_LEAVE
        and str(r.employee_id) == str(employee_id)
        and r.start_date.year == int(year)
    )


def remaining_leave_balance(
    employee: Employee,
    leave_requests: Iterable[LeaveRequest],
    schedules: Schedules,
    year: int,
) -> int:
    """Allowance minus days taken. May go negative; the dashboard shows it as-is."""
    taken = annual_leave_taken(employee.employee_id, leave_requests, schedules, year)
    return int(employee.total_annual_leave_allowance) - taken


def leave_quota_rows(
    employees: Sequence[Employee],
    leave_requests: Sequence[LeaveRequest],
    quotas: Sequence[LeaveQuota],
    schedules: Schedules,
    year: int,
) -> list[LeaveQuotaRow]:
    """Quota table: stored quotas first, then generated annual rows from profiles."""
    resolver = as_resolver(schedules)
    names = {e.employee_id: e.name for e in employees}
    rows: list[LeaveQuotaRow] = []

    for q in quotas:
        taken = sum(
            leave_days_consumed(r, resolver)
            for r in leave_requests
            if r.status == RequestStatus.APPROVED
            and str(r.employee_id) == str(q.employee_id)
            and r.leave_type == q.leave_type
            and q.valid_from <= r.start_date <= q.valid_until
        )
        rows.append(
            LeaveQuotaRow(
                quota_id=q.quota_id,
                employee_id=q.employee_id,
                employee_name=q.employee_name or names.get(q.employee_id, ""),
                leave_type=q.leave_type,
                period_label=q.period_label,
                valid_from=q.valid_from,
                valid_until=q.valid_until,
                quota=q.quota,
                taken=taken,
                remaining=q.quota - taken,
            )
        )

    with_annual_quota = {
        q.employee_id for q in quotas if q.leave_type == RequestKind.ANNUAL_LEAVE and q.is_valid_in_year(year)
    }
    for e in employees:
        if e.employee_id in with_annual_quota or e.total_annual_leave_allowance <= 0:
            continue
        taken = annual_leave_taken(e.employee_id, leave_requests, resolver, year)
        rows.append(
            LeaveQuotaRow(
                quota_id=f"generated-annual-{e.employee_id}-{year}",
                employee_id=e.employee_id,
                employee_name=e.name,
                leave_type=RequestKind.ANNUAL_LEAVE,
                period_label=str(year),
                valid_from=date(year, 1, 1),
                valid_until=date(year, 12, 31),
                quota=e.total_annual_leave_allowance,
                taken=taken,
                remaining=e.total_annual_leave_allowance - taken,
            )
        )

    return rows
