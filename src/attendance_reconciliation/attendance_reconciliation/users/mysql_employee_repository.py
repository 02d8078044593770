from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "id, nik, name, role, seksi, posisi, manager_id, total_cuti_tahunan"


def _to_employee(row: dict, managers: dict[str, str]) -> Employee:
    manager_uid = row.get("manager_id")
    return Employee(
        employee_id=str(row["nik"]),
        name=row["name"],
        role=Role(row["role"]),
        section=row.get("seksi") or "",
        position=row.get("posisi") or "",
        manager_id=managers.get(str(manager_uid)) if manager_uid else None,
        total_annual_leave_allowance=int(row.get("total_cuti_tahunan") or 0),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    """Reads user_profiles; manager references (user ids) are translated to NIKs."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _manager_niks(self, cur) -> dict[str, str]:
        cur.execute("SELECT id, nik FROM user_profiles")
        return {str(r["id"]): str(r["nik"]) for r in fetchall(cur)}

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            managers = self._manager_niks(cur)
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM user_profiles
                WHERE nik=%s
                """,
                (str(employee_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return _to_employee(row, managers)

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            managers = self._manager_niks(cur)
            cur.execute(f"SELECT {_COLUMNS} FROM user_profiles ORDER BY name ASC, nik ASC")
            return [_to_employee(r, managers) for r in fetchall(cur)]

    def list_subordinates(self, manager_id: str) -> Sequence[Employee]:
        return [e for e in self.list_all() if e.manager_id == str(manager_id)]
