from __future__ import annotations

from datetime import date, datetime

from src.attendance_reconciliation.attendance_reconciliation.attendance.factory import DayStatusStrategyFactory
from src.attendance_reconciliation.attendance_reconciliation.attendance.model import AttendanceRecord
from src.attendance_reconciliation.attendance_reconciliation.attendance.strategies.absent_strategy import AbsentStrategy
from src.attendance_reconciliation.attendance_reconciliation.attendance.strategies.attended_strategy import (
    AttendedStrategy,
)
from src.attendance_reconciliation.attendance_reconciliation.attendance.strategies.leave_strategy import LeaveStrategy
from src.attendance_reconciliation.attendance_reconciliation.attendance.strategies.off_strategy import OffDayStrategy
from src.attendance_reconciliation.attendance_reconciliation.core.enums import DayStatus, RequestKind, RequestStatus
from src.attendance_reconciliation.attendance_reconciliation.requests.model import LeaveRequest

DAY = date(2025, 11, 5)


def _attendance(clock_in=None, clock_out=None) -> AttendanceRecord:
    return AttendanceRecord(
        record_id="P-1",
        employee_id="E1",
        work_date=DAY,
        clock_in_time=clock_in,
        clock_out_time=clock_out,
    )


def _leave(kind=RequestKind.ANNUAL_LEAVE) -> LeaveRequest:
    return LeaveRequest(
        request_id="L-1",
        employee_id="E1",
        leave_type=kind,
        start_date=DAY,
        end_date=DAY,
        status=RequestStatus.APPROVED,
        submitted_at=datetime(2025, 11, 1, 9, 0),
    )


def test_factory_picks_strategy_by_precedence():
    f = DayStatusStrategyFactory()

    assert isinstance(f.for_day(shift_code="SHIFT_A", attendance=_attendance("08:00", "17:00"), leave=_leave()), LeaveStrategy)
    assert isinstance(f.for_day(shift_code="OFF", attendance=_attendance("08:00"), leave=None), AttendedStrategy)
    assert isinstance(f.for_day(shift_code="OFF", attendance=None, leave=None), OffDayStrategy)
    assert isinstance(f.for_day(shift_code="SHIFT_A", attendance=None, leave=None), AbsentStrategy)


def test_leave_wins_over_attendance():
    decision = DayStatusStrategyFactory().decide(
        shift_code="SHIFT_A", attendance=_attendance("08:00", "17:00"), leave=_leave()
    )
    assert decision.status == DayStatus.ON_LEAVE
    assert decision.note == "Cuti Tahunan"


def test_sick_leave_has_its_own_status():
    decision = DayStatusStrategyFactory().decide(
        shift_code="SHIFT_A", attendance=None, leave=_leave(RequestKind.SICK_LEAVE)
    )
    assert decision.status == DayStatus.SICK_LEAVE


def test_present_and_incomplete_days():
    f = DayStatusStrategyFactory()

    assert f.decide(shift_code="SHIFT_A", attendance=_attendance("08:00", "17:00"), leave=None).status == DayStatus.PRESENT

    missing_out = f.decide(shift_code="SHIFT_A", attendance=_attendance("08:00"), leave=None)
    assert missing_out.status == DayStatus.INCOMPLETE
    assert missing_out.note == "Belum clock-out"

    missing_in = f.decide(shift_code="SHIFT_A", attendance=_attendance(None, "17:00"), leave=None)
    assert missing_in.status == DayStatus.INCOMPLETE
    assert missing_in.note == "Tanpa clock-in"


def test_off_absent_and_worked_off_day():
    f = DayStatusStrategyFactory()

    assert f.decide(shift_code="OFF", attendance=None, leave=None).status == DayStatus.OFF
    assert f.decide(shift_code="SHIFT_A", attendance=_attendance(), leave=None).status == DayStatus.ABSENT

    worked_off = f.decide(shift_code="OFF", attendance=_attendance("08:00", "12:00"), leave=None)
    assert worked_off.status == DayStatus.PRESENT
    assert worked_off.note == "Masuk di hari OFF"
