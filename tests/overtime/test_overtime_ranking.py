from __future__ import annotations

from datetime import date, datetime

import pytest

from src.attendance_reconciliation.attendance_reconciliation.core.enums import RequestStatus
from src.attendance_reconciliation.attendance_reconciliation.core.exceptions import MalformedTimeValue
from src.attendance_reconciliation.attendance_reconciliation.overtime.hours import (
    overtime_hours_for_day,
    overtime_window_hours,
    request_hours,
)
from src.attendance_reconciliation.attendance_reconciliation.overtime.ranking import (
    monthly_overtime_recap,
    top_n_by_overtime_hours,
    total_overtime_by_employee,
)
from src.attendance_reconciliation.attendance_reconciliation.requests.model import OvertimeRequest
from src.attendance_reconciliation.attendance_reconciliation.users.model import Employee

EMPLOYEES = [
    Employee(employee_id="A", name="Ani", section="Produksi", position="Operator"),
    Employee(employee_id="B", name="Budi", section="Produksi", position="Operator"),
    Employee(employee_id="C", name="Citra", section="Gudang", position="Staf"),
    Employee(employee_id="D", name="Dewi", section="Gudang", position="Staf"),
]


def _ot(request_id, employee_id, hours, *, day=date(2025, 11, 5), status=RequestStatus.APPROVED, **kw):
    return OvertimeRequest(
        request_id=request_id,
        employee_id=employee_id,
        overtime_date=day,
        hours=hours,
        status=status,
        submitted_at=datetime(2025, 11, 6, 8, 0),
        start_time=kw.get("start_time"),
        end_time=kw.get("end_time"),
    )


def test_top_n_keeps_input_order_on_ties():
    requests = [_ot("1", "C", 5), _ot("2", "A", 6), _ot("3", "A", 4), _ot("4", "B", 10)]

    top = top_n_by_overtime_hours(EMPLOYEES, requests, 2)

    assert [t.employee_id for t in top] == ["A", "B"]
    assert [t.total_hours for t in top] == [10, 10]


def test_zero_totals_and_unapproved_requests_are_left_out():
    requests = [_ot("1", "A", 3), _ot("2", "B", 8, status=RequestStatus.SUBMITTED)]

    top = top_n_by_overtime_hours(EMPLOYEES, requests, None)

    assert [t.employee_id for t in top] == ["A"]
    assert top[0].name == "Ani"
    assert top[0].section == "Produksi"


def test_totals_cover_every_employee_in_order():
    totals = total_overtime_by_employee(EMPLOYEES, [_ot("1", "D", 1.5)])

    assert [(t.employee_id, t.total_hours) for t in totals] == [("A", 0), ("B", 0), ("C", 0), ("D", 1.5)]


def test_date_window_filters_requests():
    requests = [
        _ot("1", "A", 3, day=date(2025, 10, 31)),
        _ot("2", "B", 2, day=date(2025, 11, 1)),
    ]

    top = top_n_by_overtime_hours(EMPLOYEES, requests, 10, start=date(2025, 11, 1), end=date(2025, 11, 30))

    assert [t.employee_id for t in top] == ["B"]


def test_monthly_recap_sorts_descending():
    requests = [
        _ot("1", "A", 2, day=date(2025, 11, 3)),
        _ot("2", "C", 7, day=date(2025, 11, 28)),
        _ot("3", "B", 9, day=date(2025, 12, 1)),
    ]

    recap = monthly_overtime_recap(EMPLOYEES, requests, 2025, 11)

    assert [(t.employee_id, t.total_hours) for t in recap] == [("C", 7), ("A", 2)]


def test_window_hours_wrap_past_midnight():
    assert overtime_window_hours("17:00", "19:30") == 2.5
    assert overtime_window_hours("22:00", "02:00") == 4.0


def test_request_hours_fall_back_to_window():
    assert request_hours(_ot("1", "A", 3)) == 3.0
    assert request_hours(_ot("2", "A", 0, start_time="20:00", end_time="23:20")) == 3.33
    assert request_hours(_ot("3", "A", 0)) == 0.0


def test_malformed_window_names_the_request():
    with pytest.raises(MalformedTimeValue) as exc:
        request_hours(_ot("OT-9", "A", 0, start_time="jam 8", end_time="10:00"))

    assert exc.value.record_id == "OT-9"
    assert exc.value.field == "start_time"


def test_overtime_hours_for_day():
    requests = [
        _ot("1", "A", 2),
        _ot("2", "A", 5, status=RequestStatus.SUBMITTED),
        _ot("3", "A", 1, day=date(2025, 11, 6)),
    ]

    assert overtime_hours_for_day(requests, "A", date(2025, 11, 5)) == 2
