from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .core.constants import DEFAULT_TOP_N
from .database.connection import DBConfig, DatabaseConnection
from .leave.mysql_leave_quota_repository import MySQLLeaveQuotaRepository
from .leave.repository import LeaveQuotaRepository
from .reports.service import ReportService
from .requests.mysql_request_repository import MySQLRequestRepository
from .requests.repository import RequestRepository
from .requests.service import RequestService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .shifts.mysql_shift_repository import MySQLShiftConfigRepository
from .shifts.repository import ShiftConfigRepository
from .users.mysql_employee_repository import MySQLEmployeeRepository
from .users.repository import EmployeeRepository


@dataclass(frozen=True)
class Container:
    schedules_repo: ScheduleRepository
    attendance_repo: AttendanceRepository
    requests_repo: RequestRepository
    employees_repo: EmployeeRepository
    quotas_repo: LeaveQuotaRepository
    shifts_repo: ShiftConfigRepository

    report_service: ReportService
    request_service: RequestService


def wire(
    *,
    schedules_repo: ScheduleRepository,
    attendance_repo: AttendanceRepository,
    requests_repo: RequestRepository,
    employees_repo: EmployeeRepository,
    quotas_repo: LeaveQuotaRepository,
    shifts_repo: ShiftConfigRepository,
    top_n: int = DEFAULT_TOP_N,
) -> Container:
    """Build the services on top of any repository implementations."""
    return Container(
        schedules_repo=schedules_repo,
        attendance_repo=attendance_repo,
        requests_repo=requests_repo,
        employees_repo=employees_repo,
        quotas_repo=quotas_repo,
        shifts_repo=shifts_repo,
        report_service=ReportService(
            schedules_repo,
            attendance_repo,
            requests_repo,
            employees_repo,
            quotas_repo,
            shifts_repo,
            top_n=top_n,
        ),
        request_service=RequestService(requests_repo),
    )


def build_container(*, db_config: dict, top_n: int = DEFAULT_TOP_N) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return wire(
        schedules_repo=MySQLScheduleRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        requests_repo=MySQLRequestRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        quotas_repo=MySQLLeaveQuotaRepository(conn),
        shifts_repo=MySQLShiftConfigRepository(conn),
        top_n=top_n,
    )
