from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.factory import DayStatusStrategyFactory
from ..attendance.merger import CorrectionMerger, ambiguous_clock_types
from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import iter_days
from ..common.validators import require_date_range
from ..core.constants import HOURS_DECIMALS
from ..core.enums import DayStatus, RequestKind, RequestStatus, WarningCode
from ..leave.balance import total_leave_days_consumed
from ..overtime.hours import approved_overtime, request_hours
from ..requests.model import CorrectionRequest, LeaveRequest, OvertimeRequest
from ..schedules.model import ScheduleEntry
from ..schedules.resolver import ScheduleResolver
from .calculator.base import WorkedHoursCalculator
from .calculator.standard_calculator import StandardWorkedHoursCalculator


@dataclass(frozen=True)
class DataQualityWarning:
    code: WarningCode
    work_date: date
    message: str
    record_id: Optional[str] = None


@dataclass(frozen=True)
class DaySummary:
    work_date: date
    shift_code: str
    effective_attendance: Optional[AttendanceRecord]
    is_on_approved_leave: bool
    leave_kind: Optional[RequestKind]
    overtime_hours: float
    worked_hours: Optional[float]
    status: DayStatus
    status_note: Optional[str] = None
    overtime_start: Optional[str] = None
    overtime_end: Optional[str] = None
    warnings: tuple[DataQualityWarning, ...] = ()


@dataclass(frozen=True)
class PeriodSummary:
    employee_id: str
    start_date: date
    end_date: date
    days: tuple[DaySummary, ...]
    total_approved_leave_days_consumed: int
    total_overtime_hours: float
    total_worked_hours: float

    @property
    def warnings(self) -> tuple[DataQualityWarning, ...]:
        return tuple(w for d in self.days for w in d.warnings)


def _for_employee(items: Iterable, employee_id: str) -> list:
    return [i for i in items if str(i.employee_id) == str(employee_id)]


class PeriodAggregator:
    """Combines schedules, effective attendance and requests over a date range.

    Pure: inputs are plain collections and are never modified. A malformed
    clock value aborts the computation (MalformedTimeValue); a negative worked
    time only attaches a warning to its day.
    """

    def __init__(
        self,
        *,
        merger: Optional[CorrectionMerger] = None,
        calculator: Optional[WorkedHoursCalculator] = None,
        status_factory: Optional[DayStatusStrategyFactory] = None,
    ):
        self._merger = merger or CorrectionMerger()
        self._calculator = calculator or StandardWorkedHoursCalculator()
        self._status_factory = status_factory or DayStatusStrategyFactory()

    def aggregate_period(
        self,
        schedule_entries: Iterable[ScheduleEntry],
        attendance_records: Iterable[AttendanceRecord],
        correction_requests: Iterable[CorrectionRequest],
        leave_requests: Iterable[LeaveRequest],
        overtime_requests: Iterable[OvertimeRequest],
        employee_id: str,
        start_date: date,
        end_date: date,
    ) -> PeriodSummary:
        require_date_range(start_date, end_date)
        employee_id = str(employee_id)

        resolver = ScheduleResolver(_for_employee(schedule_entries, employee_id))
        attendance_by_day = {r.work_date: r for r in _for_employee(attendance_records, employee_id)}

        corrections_by_day: dict[date, list[CorrectionRequest]] = {}
        for c in _for_employee(correction_requests, employee_id):
            if c.status == RequestStatus.APPROVED:
                corrections_by_day.setdefault(c.target_date, []).append(c)

        approved_leaves = [
            r for r in _for_employee(leave_requests, employee_id) if r.status == RequestStatus.APPROVED
        ]
        overtime = approved_overtime(overtime_requests, employee_id=employee_id, start=start_date, end=end_date)

        days = tuple(
            self._summarize_day(
                day,
                resolver=resolver,
                raw=attendance_by_day.get(day),
                corrections=corrections_by_day.get(day, []),
                leaves=approved_leaves,
                overtime=overtime,
                employee_id=employee_id,
            )
            for day in iter_days(start_date, end_date)
        )

        return PeriodSummary(
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            days=days,
            total_approved_leave_days_consumed=total_leave_days_consumed(
                approved_leaves, resolver, employee_id, start_date, end_date
            ),
            total_overtime_hours=round(sum(d.overtime_hours for d in days), HOURS_DECIMALS),
            total_worked_hours=round(sum(d.worked_hours for d in days if d.worked_hours is not None), HOURS_DECIMALS),
        )

    def _summarize_day(
        self,
        day: date,
        *,
        resolver: ScheduleResolver,
        raw: Optional[AttendanceRecord],
        corrections: Sequence[CorrectionRequest],
        leaves: Sequence[LeaveRequest],
        overtime: Sequence[OvertimeRequest],
        employee_id: str,
    ) -> DaySummary:
        shift_code = resolver.resolve_shift(employee_id, day)
        effective = self._merger.merge(
            raw,
            corrections,
            employee_id=employee_id,
            work_date=day,
            shift_code=shift_code,
        )
        leave = next((r for r in leaves if r.covers(day)), None)
        day_overtime = [r for r in overtime if r.overtime_date == day]
        overtime_hours = round(sum(request_hours(r) for r in day_overtime), HOURS_DECIMALS)
        window = next((r for r in day_overtime if r.start_time and r.end_time), None)
        worked = self._calculator.worked_hours(effective)

        warnings: list[DataQualityWarning] = []
        for clock_type in ambiguous_clock_types(corrections):
            warnings.append(
                DataQualityWarning(
                    code=WarningCode.AMBIGUOUS_CORRECTION,
                    work_date=day,
                    message=f"Lebih dari satu pembetulan disetujui untuk clock-{clock_type.value}",
                    record_id=effective.source_of(clock_type) if effective else None,
                )
            )
        if worked is not None and worked < 0:
            warnings.append(
                DataQualityWarning(
                    code=WarningCode.NEGATIVE_WORKED_HOURS,
                    work_date=day,
                    message="Jam pulang lebih awal dari jam masuk",
                    record_id=effective.record_id if effective else None,
                )
            )

        decision = self._status_factory.decide(shift_code=shift_code, attendance=effective, leave=leave)

        return DaySummary(
            work_date=day,
            shift_code=shift_code,
            effective_attendance=effective,
            is_on_approved_leave=leave is not None,
            leave_kind=leave.leave_type if leave else None,
            overtime_hours=overtime_hours,
            worked_hours=worked,
            status=decision.status,
            status_note=decision.note,
            overtime_start=window.start_time if window else None,
            overtime_end=window.end_time if window else None,
            warnings=tuple(warnings),
        )


def aggregate_period(
    schedule_entries: Iterable[ScheduleEntry],
    attendance_records: Iterable[AttendanceRecord],
    correction_requests: Iterable[CorrectionRequest],
    leave_requests: Iterable[LeaveRequest],
    overtime_requests: Iterable[OvertimeRequest],
    employee_id: str,
    start_date: date,
    end_date: date,
) -> PeriodSummary:
    return PeriodAggregator().aggregate_period(
        schedule_entries,
        attendance_records,
        correction_requests,
        leave_requests,
        overtime_requests,
        employee_id,
        start_date,
        end_date,
    )
