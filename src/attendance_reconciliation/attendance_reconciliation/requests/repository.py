from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ClockType, RequestKind, RequestStatus
from .model import CorrectionRequest, LeaveRequest, OvertimeRequest, Proposal, SubstitutionRequest


class RequestRepository(Protocol):
    def get_request(self, *, kind: RequestKind, request_id: str) -> Optional[Proposal]:
        raise NotImplementedError

    def list_leave_requests(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_overtime_requests(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[OvertimeRequest]:
        raise NotImplementedError

    def list_substitution_requests(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[SubstitutionRequest]:
        raise NotImplementedError

    def list_correction_requests(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
        target_date: Optional[date] = None,
        clock_type: Optional[ClockType] = None,
    ) -> Sequence[CorrectionRequest]:
        raise NotImplementedError

    def update_status(
        self,
        *,
        kind: RequestKind,
        request_id: str,
        expected: RequestStatus,
        status: RequestStatus,
        admin_note: Optional[str] = None,
    ) -> bool:
        """Compare-and-set: only updates a request still in `expected` status."""

        raise NotImplementedError
