from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..common.validators import optional_note
from ..core.constants import DEFAULT_REJECTION_NOTE
from ..core.enums import RequestKind, RequestStatus, Role
from ..core.exceptions import (
    AuthorizationError,
    DomainError,
    DuplicateCorrectionError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from .model import CorrectionRequest, Proposal
from .repository import RequestRepository
from .workflow import RequestAction, next_status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BulkResult:
    succeeded: tuple[str, ...]
    failed: tuple[tuple[str, str], ...]


class RequestService:
    """Manager decisions and employee cancellations on submitted requests."""

    def __init__(self, requests: RequestRepository):
        self._requests = requests

    @staticmethod
    def _require_decider(current_role: Role) -> None:
        if not Role(current_role).can_decide:
            raise AuthorizationError("Anda tidak memiliki akses untuk memproses ajuan")

    def _get(self, kind: RequestKind, request_id: str) -> Proposal:
        req = self._requests.get_request(kind=kind, request_id=str(request_id))
        if not req:
            raise NotFoundError(f"Ajuan {kind.value} {request_id} tidak ditemukan")
        return req

    def _ensure_no_other_correction(self, req: CorrectionRequest) -> None:
        approved = self._requests.list_correction_requests(
            employee_id=req.employee_id,
            status=RequestStatus.APPROVED,
            target_date=req.target_date,
            clock_type=req.clock_type,
        )
        if any(c.request_id != req.request_id for c in approved):
            raise DuplicateCorrectionError(
                f"Clock-{req.clock_type.value} tanggal {req.target_date:%Y-%m-%d} sudah memiliki pembetulan yang disetujui"
            )

    def _apply(
        self,
        req: Proposal,
        action: RequestAction,
        *,
        note: Optional[str] = None,
        admin_note: Optional[str] = None,
    ) -> RequestStatus:
        status = next_status(req.kind, req.status, action, note=note)
        ok = self._requests.update_status(
            kind=req.kind,
            request_id=req.request_id,
            expected=req.status,
            status=status,
            admin_note=admin_note,
        )
        if not ok:
            raise InvalidTransitionError(f"Ajuan {req.request_id} sudah diproses")
        logger.info("Request %s (%s): %s -> %s", req.request_id, req.kind.value, req.status.value, status.value)
        return status

    def approve(self, *, current_role: Role, kind: RequestKind, request_id: str, admin_note: str = "") -> RequestStatus:
        self._require_decider(current_role)
        req = self._get(kind, request_id)
        if isinstance(req, CorrectionRequest):
            self._ensure_no_other_correction(req)
        return self._apply(req, RequestAction.APPROVE, admin_note=optional_note(admin_note))

    def reject(self, *, current_role: Role, kind: RequestKind, request_id: str, note: str = "") -> RequestStatus:
        """A note sends the request back for revision; no note rejects it outright."""
        self._require_decider(current_role)
        req = self._get(kind, request_id)
        note = optional_note(note)
        return self._apply(req, RequestAction.REJECT, note=note, admin_note=note or DEFAULT_REJECTION_NOTE)

    def request_cancellation(
        self,
        *,
        employee_id: str,
        kind: RequestKind,
        request_id: str,
        reason: str = "",
    ) -> RequestStatus:
        req = self._get(kind, request_id)
        if str(req.employee_id) != str(employee_id):
            raise AuthorizationError("Hanya pengaju yang dapat membatalkan ajuan ini")
        return self._apply(req, RequestAction.REQUEST_CANCELLATION, admin_note=optional_note(reason))

    def approve_cancellation(self, *, current_role: Role, kind: RequestKind, request_id: str) -> RequestStatus:
        self._require_decider(current_role)
        return self._apply(self._get(kind, request_id), RequestAction.APPROVE_CANCELLATION)

    def reject_cancellation(
        self,
        *,
        current_role: Role,
        kind: RequestKind,
        request_id: str,
        note: str = "",
    ) -> RequestStatus:
        self._require_decider(current_role)
        return self._apply(
            self._get(kind, request_id),
            RequestAction.REJECT_CANCELLATION,
            admin_note=optional_note(note),
        )

    def bulk_decide(
        self,
        *,
        current_role: Role,
        action: RequestAction,
        items: Iterable[tuple[RequestKind, str]],
        note: str = "",
    ) -> BulkResult:
        if action not in {RequestAction.APPROVE, RequestAction.REJECT}:
            raise ValidationError("Aksi massal hanya mendukung setujui atau tolak")
        self._require_decider(current_role)

        succeeded: list[str] = []
        failed: list[tuple[str, str]] = []
        for kind, request_id in items:
            try:
                if action == RequestAction.APPROVE:
                    self.approve(current_role=current_role, kind=kind, request_id=request_id)
                else:
                    self.reject(current_role=current_role, kind=kind, request_id=request_id, note=note)
            except DomainError as exc:
                logger.warning("Bulk %s failed for %s %s: %s", action.value, kind.value, request_id, exc)
                failed.append((str(request_id), str(exc)))
            else:
                succeeded.append(str(request_id))

        return BulkResult(succeeded=tuple(succeeded), failed=tuple(failed))
