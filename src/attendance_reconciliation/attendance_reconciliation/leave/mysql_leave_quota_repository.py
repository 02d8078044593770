from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import parse_schedule_date
from ..core.enums import RequestKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import LeaveQuota
from .repository import LeaveQuotaRepository


class MySQLLeaveQuotaRepository(LeaveQuotaRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, employee_id: Optional[str] = None) -> Sequence[LeaveQuota]:
        clauses = ["1=1"]
        params: list[object] = []
        if employee_id is not None:
            clauses.append("nik=%s")
            params.append(str(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, nik, nama_karyawan, jenis_cuti, periode,
                       masa_berlaku_start, masa_berlaku_end, quota
                FROM quota_cuti
                WHERE {where}
                ORDER BY nik ASC, masa_berlaku_start ASC
                """,
                tuple(params),
            )
            return [
                LeaveQuota(
                    quota_id=str(r["id"]),
                    employee_id=str(r["nik"]),
                    employee_name=r.get("nama_karyawan") or "",
                    leave_type=RequestKind(r["jenis_cuti"]),
                    period_label=r.get("periode") or "",
                    valid_from=parse_schedule_date(r["masa_berlaku_start"]),
                    valid_until=parse_schedule_date(r["masa_berlaku_end"]),
                    quota=int(r.get("quota") or 0),
                )
                for r in fetchall(cur)
            ]
