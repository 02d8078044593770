from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import month_bounds
from ..core.constants import HOURS_DECIMALS
from ..requests.model import OvertimeRequest
from ..users.model import Employee
from .hours import approved_overtime, request_hours


@dataclass(frozen=True)
class OvertimeTotal:
    employee_id: str
    name: str
    section: str
    position: str
    total_hours: float


def total_overtime_by_employee(
    employees: Sequence[Employee],
    overtime_requests: Iterable[OvertimeRequest],
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[OvertimeTotal]:
    """Approved hours per employee, in the order of `employees`."""
    totals: dict[str, float] = {e.employee_id: 0.0 for e in employees}
    for r in approved_overtime(overtime_requests, start=start, end=end):
        if r.employee_id in totals:
            totals[r.employee_id] += request_hours(r)

    return [
        OvertimeTotal(
            employee_id=e.employee_id,
            name=e.name,
            section=e.section,
            position=e.position,
            total_hours=round(totals[e.employee_id], HOURS_DECIMALS),
        )
        for e in employees
    ]


def top_n_by_overtime_hours(
    employees: Sequence[Employee],
    overtime_requests: Iterable[OvertimeRequest],
    n: Optional[int],
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[OvertimeTotal]:
    """Highest approved overtime first.

    Ties keep the order of `employees` (sorted() is stable). Employees without
    approved overtime are left out. n=None returns everyone.
    """
    totals = [t for t in total_overtime_by_employee(employees, overtime_requests, start=start, end=end) if t.total_hours > 0]
    ranked = sorted(totals, key=lambda t: t.total_hours, reverse=True)
    if n is None:
        return ranked
    return ranked[: max(int(n), 0)]


def monthly_overtime_recap(
    employees: Sequence[Employee],
    overtime_requests: Iterable[OvertimeRequest],
    year: int,
    month: int,
) -> list[OvertimeTotal]:
    start, end = month_bounds(year, month)
    return top_n_by_overtime_hours(employees, overtime_requests, None, start=start, end=end)
