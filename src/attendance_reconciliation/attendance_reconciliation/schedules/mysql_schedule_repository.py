from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_schedule_date
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ScheduleEntry
from .repository import ScheduleRepository


def _to_entry(r: dict) -> ScheduleEntry:
    return ScheduleEntry(
        entry_id=str(r["id"]),
        employee_id=str(r["nik"]),
        work_date=parse_schedule_date(r["tanggal"]),
        shift_code=r.get("shift") or "",
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(self, *, start: date, end: date, employee_id: Optional[str] = None) -> Sequence[ScheduleEntry]:
        clauses = ["tanggal BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if employee_id is not None:
            clauses.append("nik=%s")
            params.append(str(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, nik, tanggal, shift
                FROM jadwal_kerja
                WHERE {where}
                ORDER BY tanggal ASC, nik ASC, id ASC
                """,
                tuple(params),
            )
            return [_to_entry(r) for r in fetchall(cur)]
