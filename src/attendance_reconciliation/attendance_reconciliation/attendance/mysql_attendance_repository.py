from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_schedule_date
from ..database.connection import DatabaseConnection
from ..database.mysql_base import clock_text, db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    id, nik, tanggal, shift,
    clock_in_timestamp, clock_out_timestamp,
    clock_in_work_location_type, clock_out_work_location_type
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=str(r["id"]),
        employee_id=str(r["nik"]),
        work_date=parse_schedule_date(r["tanggal"]),
        shift_code=r.get("shift"),
        clock_in_time=clock_text(r.get("clock_in_timestamp")),
        clock_out_time=clock_text(r.get("clock_out_timestamp")),
        clock_in_location_type=r.get("clock_in_work_location_type"),
        clock_out_location_type=r.get("clock_out_work_location_type"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(self, *, start: date, end: date, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        clauses = ["tanggal BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if employee_id is not None:
            clauses.append("nik=%s")
            params.append(str(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM presensi
                WHERE {where}
                ORDER BY tanggal ASC, nik ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
