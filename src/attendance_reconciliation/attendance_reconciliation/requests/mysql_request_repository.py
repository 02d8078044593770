from __future__ import annotations

import json
from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_schedule_date
from ..core.enums import LEAVE_KINDS, ClockType, RequestKind, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import clock_text, db_cursor, fetchall, fetchone
from .model import CorrectionRequest, LeaveRequest, OvertimeRequest, Proposal, SubstitutionRequest
from .repository import RequestRepository

_TABLES = {
    RequestKind.ANNUAL_LEAVE: "usulan_cuti",
    RequestKind.LONG_LEAVE: "usulan_cuti",
    RequestKind.SICK_LEAVE: "usulan_cuti",
    RequestKind.OVERTIME: "usulan_lembur",
    RequestKind.SUBSTITUTION: "usulan_substitusi",
    RequestKind.CORRECTION: "usulan_pembetulan_presensi",
}


def _json_list(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)
    return tuple(str(v) for v in json.loads(value))


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=str(r["id"]),
        employee_id=str(r["nik"]),
        leave_type=RequestKind(r["jenis_ajuan"]),
        start_date=parse_schedule_date(r["start_date"]),
        end_date=parse_schedule_date(r["end_date"]),
        status=RequestStatus(r["status"]),
        submitted_at=r["created_at"],
        reason=r.get("keterangan") or "",
        substitute_ids=_json_list(r.get("pengganti_nik")),
        admin_note=r.get("catatan_admin"),
        decided_at=r.get("approval_timestamp"),
    )


def _to_overtime(r: dict) -> OvertimeRequest:
    return OvertimeRequest(
        request_id=str(r["id"]),
        employee_id=str(r["nik"]),
        overtime_date=parse_schedule_date(r["tanggal_lembur"]),
        hours=float(r.get("jam_lembur") or 0),
        status=RequestStatus(r["status"]),
        submitted_at=r["created_at"],
        shift_code=r.get("shift") or "",
        start_time=clock_text(r.get("jam_awal")),
        end_time=clock_text(r.get("jam_akhir")),
        no_break_shifts=_json_list(r.get("tanpa_istirahat")),
        category=r.get("kategori_lembur") or "",
        description=r.get("keterangan_lembur") or "",
        admin_note=r.get("catatan_admin"),
        decided_at=r.get("approval_timestamp"),
    )


def _to_substitution(r: dict) -> SubstitutionRequest:
    return SubstitutionRequest(
        request_id=str(r["id"]),
        employee_id=str(r["nik"]),
        substitution_date=parse_schedule_date(r["tanggal_substitusi"]),
        original_shift=r.get("shift_awal") or "",
        new_shift=r.get("shift_baru") or "",
        status=RequestStatus(r["status"]),
        submitted_at=r["created_at"],
        reason=r.get("keterangan") or "",
        admin_note=r.get("catatan_admin"),
        decided_at=r.get("approval_timestamp"),
    )


def _to_correction(r: dict) -> CorrectionRequest:
    return CorrectionRequest(
        request_id=str(r["id"]),
        employee_id=str(r["nik"]),
        target_date=parse_schedule_date(r["tanggal_pembetulan"]),
        clock_type=ClockType(r["clock_type"]),
        corrected_time=clock_text(r.get("jam_pembetulan")) or "",
        status=RequestStatus(r["status"]),
        submitted_at=r["created_at"],
        reason=r.get("alasan") or "",
        attendance_id=str(r["presensi_id"]) if r.get("presensi_id") is not None else None,
        admin_note=r.get("catatan_admin"),
        decided_at=r.get("approval_timestamp"),
    )


_MAPPERS = {
    "usulan_cuti": _to_leave,
    "usulan_lembur": _to_overtime,
    "usulan_substitusi": _to_substitution,
    "usulan_pembetulan_presensi": _to_correction,
}


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, table: str, clauses: list[str], params: list[object]) -> list:
        where = " AND ".join(clauses or ["1=1"])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT *
                FROM {table}
                WHERE {where}
                ORDER BY created_at ASC, id ASC
                """,
                tuple(params),
            )
            mapper = _MAPPERS[table]
            return [mapper(r) for r in fetchall(cur)]

    @staticmethod
    def _filters(employee_id: Optional[str], status: Optional[RequestStatus]) -> tuple[list[str], list[object]]:
        clauses: list[str] = []
        params: list[object] = []
        if employee_id is not None:
            clauses.append("nik=%s")
            params.append(str(employee_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        return clauses, params

    def get_request(self, *, kind: RequestKind, request_id: str) -> Optional[Proposal]:
        table = _TABLES[kind]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT * FROM {table} WHERE id=%s", (request_id,))
            r = fetchone(cur)
            if not r:
                return None
            return _MAPPERS[table](r)

    def list_leave_requests(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[LeaveRequest]:
        clauses, params = self._filters(employee_id, status)
        clauses.append("jenis_ajuan IN (%s, %s, %s)")
        params.extend(k.value for k in sorted(LEAVE_KINDS, key=lambda k: k.value))
        return self._select("usulan_cuti", clauses, params)

    def list_overtime_requests(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[OvertimeRequest]:
        clauses, params = self._filters(employee_id, status)
        return self._select("usulan_lembur", clauses, params)

    def list_substitution_requests(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[SubstitutionRequest]:
        clauses, params = self._filters(employee_id, status)
        return self._select("usulan_substitusi", clauses, params)

    def list_correction_requests(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
        target_date: Optional[date] = None,
        clock_type: Optional[ClockType] = None,
    ) -> Sequence[CorrectionRequest]:
        clauses, params = self._filters(employee_id, status)
        if target_date is not None:
            clauses.append("tanggal_pembetulan=%s")
            params.append(target_date)
        if clock_type is not None:
            clauses.append("clock_type=%s")
            params.append(clock_type.value)
        return self._select("usulan_pembetulan_presensi", clauses, params)

    def update_status(
        self,
        *,
        kind: RequestKind,
        request_id: str,
        expected: RequestStatus,
        status: RequestStatus,
        admin_note: Optional[str] = None,
    ) -> bool:
        table = _TABLES[kind]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE {table}
                SET status=%s,
                    catatan_admin=COALESCE(%s, catatan_admin),
                    approval_timestamp=NOW()
                WHERE id=%s AND status=%s
                """,
                (status.value, admin_note, request_id, expected.value),
            )
            return cur.rowcount > 0
