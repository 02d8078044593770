from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import RequestKind


@dataclass(frozen=True)
class LeaveQuota:
    """A stored leave entitlement valid over a window (e.g. long leave for 2025 s/d 2028)."""

    quota_id: str
    employee_id: str
    leave_type: RequestKind
    valid_from: date
    valid_until: date
    quota: int
    period_label: str = ""
    employee_name: str = ""

    def is_valid_in_year(self, year: int) -> bool:
        return self.valid_from.year <= year <= self.valid_until.year


@dataclass(frozen=True)
class LeaveQuotaRow:
    """Read-model for the quota table: entitlement, days taken, days remaining."""

    quota_id: str
    employee_id: str
    employee_name: str
    leave_type: RequestKind
    period_label: str
    valid_from: date
    valid_until: date
    quota: int
    taken: int
    remaining: int
