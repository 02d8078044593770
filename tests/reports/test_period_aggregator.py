from __future__ import annotations

from datetime import date, datetime

import pytest

from src.attendance_reconciliation.attendance_reconciliation.attendance.model import AttendanceRecord
from src.attendance_reconciliation.attendance_reconciliation.core.enums import (
    ClockType,
    DayStatus,
    RequestKind,
    RequestStatus,
    WarningCode,
)
from src.attendance_reconciliation.attendance_reconciliation.core.exceptions import (
    MalformedTimeValue,
    ValidationError,
)
from src.attendance_reconciliation.attendance_reconciliation.reports.aggregator import aggregate_period
from src.attendance_reconciliation.attendance_reconciliation.requests.model import (
    CorrectionRequest,
    LeaveRequest,
    OvertimeRequest,
)
from src.attendance_reconciliation.attendance_reconciliation.schedules.model import ScheduleEntry

MON, TUE, WED = date(2025, 11, 3), date(2025, 11, 4), date(2025, 11, 5)
SUBMITTED_AT = datetime(2025, 11, 1, 9, 0)


def _shift(day, code, employee_id="E1"):
    return ScheduleEntry(employee_id=employee_id, work_date=day, shift_code=code)


def _leave(start, end, *, status=RequestStatus.APPROVED, kind=RequestKind.ANNUAL_LEAVE):
    return LeaveRequest(
        request_id=f"L-{start:%d}",
        employee_id="E1",
        leave_type=kind,
        start_date=start,
        end_date=end,
        status=status,
        submitted_at=SUBMITTED_AT,
    )


def _overtime(request_id, day, hours, status):
    return OvertimeRequest(
        request_id=request_id,
        employee_id="E1",
        overtime_date=day,
        hours=hours,
        status=status,
        submitted_at=SUBMITTED_AT,
    )


def _correction(request_id, day, clock_type, value, submitted_at=SUBMITTED_AT):
    return CorrectionRequest(
        request_id=request_id,
        employee_id="E1",
        target_date=day,
        clock_type=clock_type,
        corrected_time=value,
        status=RequestStatus.APPROVED,
        submitted_at=submitted_at,
    )


def _run(*, schedules=(), attendance=(), corrections=(), leaves=(), overtime=(), start=MON, end=WED):
    return aggregate_period(schedules, attendance, corrections, leaves, overtime, "E1", start, end)


def test_leave_is_charged_on_working_days_only():
    summary = _run(
        schedules=[_shift(MON, "SHIFT_A"), _shift(TUE, "OFF"), _shift(WED, "SHIFT_A")],
        leaves=[_leave(MON, WED)],
    )

    assert summary.total_approved_leave_days_consumed == 2
    assert all(d.is_on_approved_leave for d in summary.days)
    assert [d.status for d in summary.days] == [DayStatus.ON_LEAVE] * 3


def test_leave_outside_window_is_clipped():
    summary = _run(
        schedules=[_shift(date(2025, 10, 31), "SHIFT_A"), _shift(MON, "SHIFT_A"), _shift(TUE, "SHIFT_A")],
        leaves=[_leave(date(2025, 10, 31), TUE)],
    )

    assert summary.total_approved_leave_days_consumed == 2


def test_only_approved_overtime_counts():
    summary = _run(
        schedules=[_shift(WED, "SHIFT_A")],
        overtime=[
            _overtime("O-1", WED, 2, RequestStatus.APPROVED),
            _overtime("O-2", WED, 5, RequestStatus.SUBMITTED),
        ],
    )

    assert summary.days[2].overtime_hours == 2
    assert summary.total_overtime_hours == 2


def test_day_carries_approved_overtime_window():
    windowed = OvertimeRequest(
        request_id="O-3",
        employee_id="E1",
        overtime_date=WED,
        hours=0,
        status=RequestStatus.APPROVED,
        submitted_at=SUBMITTED_AT,
        start_time="17:00",
        end_time="19:30",
    )
    pending = OvertimeRequest(
        request_id="O-4",
        employee_id="E1",
        overtime_date=TUE,
        hours=0,
        status=RequestStatus.SUBMITTED,
        submitted_at=SUBMITTED_AT,
        start_time="17:00",
        end_time="18:00",
    )

    summary = _run(schedules=[_shift(WED, "SHIFT_A")], overtime=[windowed, pending])

    mon, tue, wed = summary.days
    assert (wed.overtime_start, wed.overtime_end) == ("17:00", "19:30")
    assert wed.overtime_hours == 2.5
    assert (tue.overtime_start, tue.overtime_end) == (None, None)
    assert mon.overtime_start is None


def test_approved_out_correction_completes_the_day():
    summary = _run(
        schedules=[_shift(WED, "SHIFT_A")],
        attendance=[
            AttendanceRecord(record_id="P-1", employee_id="E1", work_date=WED, shift_code="SHIFT_A", clock_in_time="08:05")
        ],
        corrections=[_correction("C-1", WED, ClockType.OUT, "17:00")],
        start=WED,
        end=WED,
    )

    day = summary.days[0]
    assert day.effective_attendance.clock_in_time == "08:05"
    assert day.effective_attendance.clock_out_time == "17:00"
    assert day.worked_hours == 8.92
    assert day.status == DayStatus.PRESENT
    assert summary.total_worked_hours == 8.92


def test_every_day_in_range_is_reported():
    summary = _run(schedules=[_shift(MON, "SHIFT_A")])

    assert [d.work_date for d in summary.days] == [MON, TUE, WED]
    assert [d.shift_code for d in summary.days] == ["SHIFT_A", "OFF", "OFF"]
    assert [d.status for d in summary.days] == [DayStatus.ABSENT, DayStatus.OFF, DayStatus.OFF]
    assert summary.days[0].worked_hours is None
    assert summary.total_worked_hours == 0


def test_other_employees_are_ignored():
    summary = _run(
        schedules=[_shift(MON, "SHIFT_A", employee_id="E2")],
        attendance=[AttendanceRecord(record_id="P-9", employee_id="E2", work_date=MON, clock_in_time="08:00")],
    )

    assert summary.days[0].shift_code == "OFF"
    assert summary.days[0].effective_attendance is None


def test_negative_worked_hours_attach_warning_and_continue():
    summary = _run(
        schedules=[_shift(MON, "SHIFT_A"), _shift(TUE, "SHIFT_A")],
        attendance=[
            AttendanceRecord(record_id="P-1", employee_id="E1", work_date=MON, clock_in_time="17:00", clock_out_time="08:00"),
            AttendanceRecord(record_id="P-2", employee_id="E1", work_date=TUE, clock_in_time="08:00", clock_out_time="16:00"),
        ],
    )

    assert summary.days[0].worked_hours == -9.0
    assert [w.code for w in summary.days[0].warnings] == [WarningCode.NEGATIVE_WORKED_HOURS]
    assert summary.days[0].warnings[0].record_id == "P-1"
    assert summary.days[1].worked_hours == 8.0
    assert len(summary.warnings) == 1


def test_malformed_time_aborts_with_record_reference():
    with pytest.raises(MalformedTimeValue) as exc:
        _run(
            schedules=[_shift(MON, "SHIFT_A")],
            attendance=[AttendanceRecord(record_id="P-1", employee_id="E1", work_date=MON, clock_in_time="08:00")],
            corrections=[_correction("C-5", MON, ClockType.OUT, "lima sore")],
        )

    assert exc.value.record_id == "C-5"
    assert exc.value.field == "clock_out_time"


def test_ambiguous_corrections_pick_latest_and_warn():
    summary = _run(
        schedules=[_shift(MON, "SHIFT_A")],
        attendance=[AttendanceRecord(record_id="P-1", employee_id="E1", work_date=MON, clock_in_time="08:00")],
        corrections=[
            _correction("C-1", MON, ClockType.OUT, "16:00", submitted_at=datetime(2025, 11, 4, 8, 0)),
            _correction("C-2", MON, ClockType.OUT, "17:00", submitted_at=datetime(2025, 11, 4, 9, 0)),
        ],
    )

    day = summary.days[0]
    assert day.effective_attendance.clock_out_time == "17:00"
    assert [w.code for w in day.warnings] == [WarningCode.AMBIGUOUS_CORRECTION]
    assert day.warnings[0].record_id == "C-2"


def test_reversed_range_is_rejected():
    with pytest.raises(ValidationError):
        _run(start=WED, end=MON)


def test_inputs_are_not_modified():
    schedules = [_shift(MON, "SHIFT_A")]
    leaves = [_leave(MON, MON)]
    _run(schedules=schedules, leaves=leaves)

    assert schedules == [_shift(MON, "SHIFT_A")]
    assert leaves == [_leave(MON, MON)]
