from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional, Union

from ..core.enums import ClockType, RequestKind, RequestStatus


@dataclass(frozen=True)
class CorrectionRequest:
    request_id: str
    employee_id: str
    target_date: date
    clock_type: ClockType
    corrected_time: str
    status: RequestStatus
    submitted_at: datetime
    reason: str = ""
    attendance_id: Optional[str] = None
    admin_note: Optional[str] = None
    decided_at: Optional[datetime] = None

    @property
    def kind(self) -> RequestKind:
        return RequestKind.CORRECTION


@dataclass(frozen=True)
class LeaveRequest:
    """Annual leave, long leave or sick/permit leave over an inclusive date range."""

    request_id: str
    employee_id: str
    leave_type: RequestKind
    start_date: date
    end_date: date
    status: RequestStatus
    submitted_at: datetime
    reason: str = ""
    substitute_ids: tuple[str, ...] = ()
    admin_note: Optional[str] = None
    decided_at: Optional[datetime] = None

    @property
    def kind(self) -> RequestKind:
        return self.leave_type

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class OvertimeRequest:
    request_id: str
    employee_id: str
    overtime_date: date
    hours: float
    status: RequestStatus
    submitted_at: datetime
    shift_code: str = ""
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    no_break_shifts: tuple[str, ...] = ()
    category: str = ""
    description: str = ""
    admin_note: Optional[str] = None
    decided_at: Optional[datetime] = None

    @property
    def kind(self) -> RequestKind:
        return RequestKind.OVERTIME


@dataclass(frozen=True)
class SubstitutionRequest:
    request_id: str
    employee_id: str
    substitution_date: date
    original_shift: str
    new_shift: str
    status: RequestStatus
    submitted_at: datetime
    reason: str = ""
    admin_note: Optional[str] = None
    decided_at: Optional[datetime] = None

    @property
    def kind(self) -> RequestKind:
        return RequestKind.SUBSTITUTION


Proposal = Union[LeaveRequest, OvertimeRequest, SubstitutionRequest, CorrectionRequest]


@dataclass
class RequestBuckets:
    leaves: list[LeaveRequest] = field(default_factory=list)
    overtime: list[OvertimeRequest] = field(default_factory=list)
    substitutions: list[SubstitutionRequest] = field(default_factory=list)
    corrections: list[CorrectionRequest] = field(default_factory=list)


def partition_requests(requests: Iterable[Proposal]) -> RequestBuckets:
    """Split a mixed request feed by variant."""
    buckets = RequestBuckets()
    for r in requests:
        if isinstance(r, LeaveRequest):
            buckets.leaves.append(r)
        elif isinstance(r, OvertimeRequest):
            buckets.overtime.append(r)
        elif isinstance(r, SubstitutionRequest):
            buckets.substitutions.append(r)
        elif isinstance(r, CorrectionRequest):
            buckets.corrections.append(r)
        else:
            raise TypeError(f"Unsupported request type: {type(r)!r}")
    return buckets


def request_date(r: Proposal) -> date:
    """The calendar day a request is about (start day for leave)."""
    if isinstance(r, LeaveRequest):
        return r.start_date
    if isinstance(r, OvertimeRequest):
        return r.overtime_date
    if isinstance(r, SubstitutionRequest):
        return r.substitution_date
    if isinstance(r, CorrectionRequest):
        return r.target_date
    raise TypeError(f"Unsupported request type: {type(r)!r}")
