from __future__ import annotations

from enum import Enum
from typing import Optional

from ..core.enums import RequestKind, RequestStatus
from ..core.exceptions import InvalidTransitionError


class RequestAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    REQUEST_CANCELLATION = "request_cancellation"
    APPROVE_CANCELLATION = "approve_cancellation"
    REJECT_CANCELLATION = "reject_cancellation"

    @property
    def is_manager_action(self) -> bool:
        return self != RequestAction.REQUEST_CANCELLATION


TERMINAL_STATUSES = frozenset(
    {RequestStatus.REJECTED, RequestStatus.NEEDS_REVISION, RequestStatus.CANCELLED}
)


def next_status(
    kind: RequestKind,
    current: RequestStatus,
    action: RequestAction,
    *,
    note: Optional[str] = None,
) -> RequestStatus:
    """Status after applying `action`; raises InvalidTransitionError otherwise.

    Approved is terminal except for leave, where the employee may ask to
    cancel it. A rejection that carries a note asks for revision instead.
    """
    if current in TERMINAL_STATUSES:
        raise InvalidTransitionError(f"Ajuan {kind.value} berstatus {current.value} sudah final")

    if current == RequestStatus.SUBMITTED:
        if action == RequestAction.APPROVE:
            return RequestStatus.APPROVED
        if action == RequestAction.REJECT:
            return RequestStatus.NEEDS_REVISION if (note or "").strip() else RequestStatus.REJECTED

    elif current == RequestStatus.APPROVED:
        if action == RequestAction.REQUEST_CANCELLATION and kind.is_leave:
            return RequestStatus.CANCELLATION_REQUESTED

    elif current == RequestStatus.CANCELLATION_REQUESTED:
        if action == RequestAction.APPROVE_CANCELLATION:
            return RequestStatus.CANCELLED
        if action == RequestAction.REJECT_CANCELLATION:
            return RequestStatus.APPROVED

    raise InvalidTransitionError(
        f"Tidak dapat melakukan {action.value} pada ajuan {kind.value} berstatus {current.value}"
    )
