from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import month_bounds
from ..common.validators import require_date_range
from ..core.enums import RequestStatus
from ..requests.model import Proposal, request_date


@dataclass(frozen=True)
class ReportQuery:
    """Filters for a report: who, which days, which request statuses.

    An empty status filter accepts every status.
    """

    employee_id: Optional[str]
    start: date
    end: date
    status_filter: frozenset[RequestStatus] = field(default_factory=frozenset)

    def __post_init__(self):
        require_date_range(self.start, self.end)

    @classmethod
    def for_month(
        cls,
        employee_id: Optional[str],
        year: int,
        month: int,
        *,
        statuses: Iterable[RequestStatus] = (),
    ) -> "ReportQuery":
        start, end = month_bounds(year, month)
        return cls(employee_id=employee_id, start=start, end=end, status_filter=frozenset(statuses))

    def matches(self, request: Proposal) -> bool:
        if self.employee_id is not None and str(request.employee_id) != str(self.employee_id):
            return False
        if self.status_filter and request.status not in self.status_filter:
            return False
        return self.start <= request_date(request) <= self.end
