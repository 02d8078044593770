from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ShiftConfig
from .repository import ShiftConfigRepository


class MySQLShiftConfigRepository(ShiftConfigRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ShiftConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, code, name, time, color, `group`
                FROM shift_configs
                ORDER BY `group` ASC, name ASC
                """
            )
            return [
                ShiftConfig(
                    shift_id=str(r["id"]),
                    code=r["code"],
                    name=r.get("name") or "",
                    time_range=r.get("time") or "",
                    color=r.get("color") or "",
                    group=r.get("group") or "",
                )
                for r in fetchall(cur)
            ]
