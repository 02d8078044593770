from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee profile, keyed by NIK.

    Note: plain data object (no DB access code).
    """

    employee_id: str
    name: str
    role: Role = Role.EMPLOYEE
    section: str = ""
    position: str = ""
    manager_id: Optional[str] = None
    total_annual_leave_allowance: int = 0
