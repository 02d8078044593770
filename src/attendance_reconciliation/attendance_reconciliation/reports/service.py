from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_clock_time
from ..common.validators import require_year
from ..core.constants import DEFAULT_TOP_N, EMPTY_HOURS_DISPLAY, EMPTY_TIME_DISPLAY
from ..core.enums import DayStatus, RequestKind, RequestStatus
from ..core.exceptions import NotFoundError
from ..leave.balance import annual_leave_taken, leave_quota_rows, remaining_leave_balance
from ..leave.repository import LeaveQuotaRepository
from ..overtime.ranking import OvertimeTotal, monthly_overtime_recap, top_n_by_overtime_hours
from ..requests.model import Proposal
from ..requests.repository import RequestRepository
from ..schedules.repository import ScheduleRepository
from ..shifts.model import ShiftConfig
from ..shifts.repository import ShiftConfigRepository
from ..users.model import Employee
from ..users.repository import EmployeeRepository
from .aggregator import DaySummary, PeriodAggregator, PeriodSummary
from .dashboard import build_dashboard
from .query import ReportQuery

logger = logging.getLogger(__name__)

_STATUS_LABELS = {
    DayStatus.PRESENT: "Hadir",
    DayStatus.INCOMPLETE: "Belum Lengkap",
    DayStatus.ABSENT: "Tidak Hadir",
    DayStatus.OFF: "Libur",
    DayStatus.ON_LEAVE: "Cuti",
    DayStatus.SICK_LEAVE: "Izin/Sakit",
}

_STATUS_CSS = {
    DayStatus.PRESENT: "bg-success",
    DayStatus.INCOMPLETE: "bg-warning text-dark",
    DayStatus.ABSENT: "bg-danger",
    DayStatus.OFF: "bg-secondary",
    DayStatus.ON_LEAVE: "bg-info",
    DayStatus.SICK_LEAVE: "bg-info",
}


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


def overtime_row(t: OvertimeTotal) -> dict:
    return {
        "employee_id": t.employee_id,
        "name": t.name,
        "section": t.section,
        "position": t.position,
        "total_hours": t.total_hours,
    }


class ReportService:
    """Fetches raw records through repositories and feeds the pure aggregators."""

    def __init__(
        self,
        schedules: ScheduleRepository,
        attendance: AttendanceRepository,
        requests: RequestRepository,
        employees: EmployeeRepository,
        quotas: LeaveQuotaRepository,
        shifts: ShiftConfigRepository,
        *,
        aggregator: Optional[PeriodAggregator] = None,
        top_n: int = DEFAULT_TOP_N,
    ):
        self._schedules = schedules
        self._attendance = attendance
        self._requests = requests
        self._employees = employees
        self._quotas = quotas
        self._shifts = shifts
        self._aggregator = aggregator or PeriodAggregator()
        self._top_n = int(top_n)

    def _require_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(str(employee_id))
        if not employee:
            raise NotFoundError(f"Pegawai {employee_id} tidak ditemukan")
        return employee

    def period_summary(self, query: ReportQuery) -> PeriodSummary:
        employee = self._require_employee(query.employee_id)
        eid = employee.employee_id

        summary = self._aggregator.aggregate_period(
            self._schedules.list_range(start=query.start, end=query.end, employee_id=eid),
            self._attendance.list_range(start=query.start, end=query.end, employee_id=eid),
            self._requests.list_correction_requests(employee_id=eid, status=RequestStatus.APPROVED),
            self._requests.list_leave_requests(employee_id=eid, status=RequestStatus.APPROVED),
            self._requests.list_overtime_requests(employee_id=eid, status=RequestStatus.APPROVED),
            eid,
            query.start,
            query.end,
        )
        if summary.warnings:
            logger.warning(
                "Period %s..%s for %s has %d data-quality warning(s)",
                query.start,
                query.end,
                eid,
                len(summary.warnings),
            )
        return summary

    def build_period_report(self, query: ReportQuery) -> ReportData:
        summary = self.period_summary(query)
        shifts = {s.code: s for s in self._shifts.list_all()}
        return ReportData(
            rows=[self._to_ui(d, shifts.get(d.shift_code)) for d in summary.days],
            summary={
                "employee_id": summary.employee_id,
                "start": summary.start_date.strftime("%Y-%m-%d"),
                "end": summary.end_date.strftime("%Y-%m-%d"),
                "total_leave_days": summary.total_approved_leave_days_consumed,
                "total_overtime_hours": summary.total_overtime_hours,
                "total_worked_hours": summary.total_worked_hours,
                "warning_count": len(summary.warnings),
            },
        )

    def build_month_report(self, employee_id: str, year: int, month: int) -> ReportData:
        return self.build_period_report(ReportQuery.for_month(employee_id, year, month))

    def leave_balance(self, employee_id: str, year: int) -> dict:
        year = require_year(year)
        employee = self._require_employee(employee_id)
        leaves = self._requests.list_leave_requests(employee_id=employee.employee_id, status=RequestStatus.APPROVED)

        start = date(year, 1, 1)
        end = date(year, 12, 31)
        for r in leaves:
            if r.leave_type == RequestKind.ANNUAL_LEAVE and r.start_date.year == year:
                end = max(end, r.end_date)
        schedules = self._schedules.list_range(start=start, end=end, employee_id=employee.employee_id)

        return {
            "employee_id": employee.employee_id,
            "name": employee.name,
            "year": year,
            "allowance": employee.total_annual_leave_allowance,
            "taken": annual_leave_taken(employee.employee_id, leaves, schedules, year),
            "remaining": remaining_leave_balance(employee, leaves, schedules, year),
        }

    def leave_quota_table(self, year: int, *, manager_id: Optional[str] = None) -> list[dict]:
        """Quota rows for everyone, or only for a manager's direct reports."""
        year = require_year(year)
        employees = self._employees.list_all()
        quotas = self._quotas.list_all()
        leaves = self._requests.list_leave_requests(status=RequestStatus.APPROVED)

        if manager_id is not None:
            employees = self._employees.list_subordinates(str(manager_id))
            team = {e.employee_id for e in employees}
            quotas = [q for q in quotas if q.employee_id in team]
            leaves = [r for r in leaves if r.employee_id in team]

        schedules = []
        if leaves:
            start = min(r.start_date for r in leaves)
            end = max(r.end_date for r in leaves)
            schedules = self._schedules.list_range(start=start, end=end)

        return [
            {
                "quota_id": row.quota_id,
                "employee_id": row.employee_id,
                "name": row.employee_name,
                "leave_type": row.leave_type.value,
                "period": row.period_label,
                "valid_from": row.valid_from.strftime("%Y-%m-%d"),
                "valid_until": row.valid_until.strftime("%Y-%m-%d"),
                "quota": row.quota,
                "taken": row.taken,
                "remaining": row.remaining,
            }
            for row in leave_quota_rows(employees, leaves, quotas, schedules, year)
        ]

    def top_overtime(self, *, start: Optional[date], end: Optional[date], n: Optional[int] = None) -> list[dict]:
        ranking = top_n_by_overtime_hours(
            self._employees.list_all(),
            self._requests.list_overtime_requests(status=RequestStatus.APPROVED),
            self._top_n if n is None else n,
            start=start,
            end=end,
        )
        return [overtime_row(t) for t in ranking]

    def overtime_recap(self, year: int, month: int) -> list[dict]:
        recap = monthly_overtime_recap(
            self._employees.list_all(),
            self._requests.list_overtime_requests(status=RequestStatus.APPROVED),
            int(year),
            int(month),
        )
        return [overtime_row(t) for t in recap]

    def list_requests(self, query: ReportQuery) -> list[Proposal]:
        eid = query.employee_id
        proposals: list[Proposal] = [
            *self._requests.list_leave_requests(employee_id=eid),
            *self._requests.list_overtime_requests(employee_id=eid),
            *self._requests.list_substitution_requests(employee_id=eid),
            *self._requests.list_correction_requests(employee_id=eid),
        ]
        matched = [p for p in proposals if query.matches(p)]
        matched.sort(key=lambda p: p.submitted_at)
        return matched

    def dashboard(self, *, today: date) -> dict:
        proposals: list[Proposal] = [
            *self._requests.list_leave_requests(),
            *self._requests.list_overtime_requests(),
        ]
        metrics = build_dashboard(proposals, self._employees.list_all(), today=today, top_n=self._top_n)
        return {
            "pending_leave": metrics.pending_leave,
            "pending_overtime": metrics.pending_overtime,
            "overtime_this_month": metrics.overtime_this_month,
            "overtime_last_month": metrics.overtime_last_month,
            "top_overtime": [overtime_row(t) for t in metrics.top_overtime],
        }

    def _to_ui(self, d: DaySummary, shift: Optional[ShiftConfig]) -> dict:
        eff = d.effective_attendance
        scheduled_in, scheduled_out = shift.scheduled_times if shift else (None, None)
        clock_in = format_clock_time(eff.clock_in_time) if eff else None
        clock_out = format_clock_time(eff.clock_out_time) if eff else None

        return {
            "date": d.work_date.strftime("%Y-%m-%d"),
            "shift": d.shift_code,
            "scheduled_in": scheduled_in or "",
            "scheduled_out": scheduled_out or "",
            "clock_in": clock_in or EMPTY_TIME_DISPLAY,
            "clock_out": clock_out or EMPTY_TIME_DISPLAY,
            "location": (eff.clock_in_location_type or "") if eff else "",
            "corrected": bool(eff and eff.is_corrected),
            "worked_hours": f"{d.worked_hours:.1f}" if d.worked_hours is not None else EMPTY_HOURS_DISPLAY,
            "overtime_hours": d.overtime_hours,
            "overtime_start": d.overtime_start or "",
            "overtime_end": d.overtime_end or "",
            "leave": d.leave_kind.value if d.leave_kind else "",
            "status": _STATUS_LABELS.get(d.status, d.status.value),
            "status_note": d.status_note or "",
            "css_class": _STATUS_CSS.get(d.status, "bg-secondary"),
            "warnings": [w.code.value for w in d.warnings],
        }
