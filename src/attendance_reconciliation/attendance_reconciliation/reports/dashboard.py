from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from ..common.datetime_utils import previous_month
from ..core.constants import DEFAULT_TOP_N, HOURS_DECIMALS
from ..core.enums import RequestKind, RequestStatus
from ..overtime.hours import request_hours
from ..overtime.ranking import OvertimeTotal, top_n_by_overtime_hours
from ..requests.model import Proposal, partition_requests
from ..users.model import Employee


@dataclass(frozen=True)
class DashboardMetrics:
    pending_leave: int
    pending_overtime: int
    overtime_this_month: float
    overtime_last_month: float
    top_overtime: tuple[OvertimeTotal, ...]


def build_dashboard(
    proposals: Iterable[Proposal],
    employees: Sequence[Employee],
    *,
    today: date,
    top_n: int = DEFAULT_TOP_N,
) -> DashboardMetrics:
    """Admin dashboard cards.

    Monthly overtime is bucketed by the month the request was submitted in,
    the top list covers all approved overtime.
    """
    buckets = partition_requests(proposals)

    pending_leave = sum(
        1
        for r in buckets.leaves
        if r.status == RequestStatus.SUBMITTED and r.leave_type == RequestKind.ANNUAL_LEAVE
    )
    pending_overtime = sum(1 for r in buckets.overtime if r.status == RequestStatus.SUBMITTED)

    last_year, last_month = previous_month(today.year, today.month)
    this_month_hours = 0.0
    last_month_hours = 0.0
    for r in buckets.overtime:
        if r.status != RequestStatus.APPROVED:
            continue
        submitted = (r.submitted_at.year, r.submitted_at.month)
        if submitted == (today.year, today.month):
            this_month_hours += request_hours(r)
        elif submitted == (last_year, last_month):
            last_month_hours += request_hours(r)

    return DashboardMetrics(
        pending_leave=pending_leave,
        pending_overtime=pending_overtime,
        overtime_this_month=round(this_month_hours, HOURS_DECIMALS),
        overtime_last_month=round(last_month_hours, HOURS_DECIMALS),
        top_overtime=tuple(top_n_by_overtime_hours(employees, buckets.overtime, top_n)),
    )
