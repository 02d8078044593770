from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for approval permissions."""

    SUPER_ADMIN = "SuperAdmin"
    ADMIN = "Admin"
    MANAGER = "Manager"
    EMPLOYEE = "Pegawai"

    @property
    def can_decide(self) -> bool:
        return self in {Role.SUPER_ADMIN, Role.ADMIN, Role.MANAGER}


class RequestStatus(str, Enum):
    """Approval status of a request, stored with the backend's values."""

    SUBMITTED = "Diajukan"
    APPROVED = "Disetujui"
    REJECTED = "Ditolak"
    NEEDS_REVISION = "Revisi"
    CANCELLATION_REQUESTED = "Pembatalan Diajukan"
    CANCELLED = "Dibatalkan"


class RequestKind(str, Enum):
    ANNUAL_LEAVE = "Cuti Tahunan"
    LONG_LEAVE = "Cuti Besar"
    SICK_LEAVE = "Izin/Sakit"
    OVERTIME = "Lembur"
    SUBSTITUTION = "Substitusi"
    CORRECTION = "Pembetulan Presensi"

    @property
    def is_leave(self) -> bool:
        return self in LEAVE_KINDS


LEAVE_KINDS = frozenset({RequestKind.ANNUAL_LEAVE, RequestKind.LONG_LEAVE, RequestKind.SICK_LEAVE})


class ClockType(str, Enum):
    IN = "in"
    OUT = "out"


class DayStatus(str, Enum):
    """Badge shown for one calendar day of an employee."""

    PRESENT = "PRESENT"
    INCOMPLETE = "INCOMPLETE"
    ABSENT = "ABSENT"
    OFF = "OFF"
    ON_LEAVE = "ON_LEAVE"
    SICK_LEAVE = "SICK_LEAVE"


class WarningCode(str, Enum):
    NEGATIVE_WORKED_HOURS = "NEGATIVE_WORKED_HOURS"
    AMBIGUOUS_CORRECTION = "AMBIGUOUS_CORRECTION"
