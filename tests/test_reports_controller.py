from __future__ import annotations

from datetime import date, datetime

import pytest

from src.attendance_reconciliation.attendance_reconciliation.attendance.model import AttendanceRecord
from src.attendance_reconciliation.attendance_reconciliation.core.enums import RequestKind, RequestStatus
from src.attendance_reconciliation.attendance_reconciliation.main import create_app
from src.attendance_reconciliation.attendance_reconciliation.requests.model import LeaveRequest, OvertimeRequest
from src.attendance_reconciliation.attendance_reconciliation.schedules.model import ScheduleEntry
from src.attendance_reconciliation.attendance_reconciliation.users.model import Employee


@pytest.fixture
def client(make_container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    container = make_container(
        employees=[
            Employee(employee_id="E1", name="Ani", total_annual_leave_allowance=12),
            Employee(employee_id="E2", name="Budi"),
        ],
        schedules=[
            ScheduleEntry(employee_id="E1", work_date=date(2025, 11, 5), shift_code="SHIFT_A"),
            ScheduleEntry(employee_id="E2", work_date=date(2025, 11, 5), shift_code="SHIFT_A"),
        ],
        attendance=[
            AttendanceRecord(
                record_id="P-1",
                employee_id="E1",
                work_date=date(2025, 11, 5),
                clock_in_time="08:00",
                clock_out_time="16:30",
            ),
            AttendanceRecord(
                record_id="P-2",
                employee_id="E2",
                work_date=date(2025, 11, 5),
                clock_in_time="jam 8",
                clock_out_time="16:30",
            ),
        ],
        requests=[
            LeaveRequest(
                request_id="L-1",
                employee_id="E1",
                leave_type=RequestKind.ANNUAL_LEAVE,
                start_date=date(2025, 11, 10),
                end_date=date(2025, 11, 10),
                status=RequestStatus.SUBMITTED,
                submitted_at=datetime(2025, 11, 1, 9, 0),
            ),
            OvertimeRequest(
                request_id="O-1",
                employee_id="E1",
                overtime_date=date(2025, 11, 5),
                hours=2,
                status=RequestStatus.APPROVED,
                submitted_at=datetime(2025, 11, 5, 19, 0),
            ),
            OvertimeRequest(
                request_id="O-2",
                employee_id="E2",
                overtime_date=date(2025, 11, 6),
                hours=3,
                status=RequestStatus.APPROVED,
                submitted_at=datetime(2025, 11, 6, 19, 0),
            ),
        ],
    )
    app = create_app(container=container)
    return app.test_client()


def test_period_endpoint(client):
    resp = client.get("/api/employees/E1/period?start=2025-11-05&end=2025-11-06")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert [r["date"] for r in body["data"]["rows"]] == ["2025-11-05", "2025-11-06"]
    assert body["data"]["rows"][0]["status"] == "Hadir"
    assert body["data"]["summary"]["total_worked_hours"] == 8.5
    assert body["data"]["summary"]["total_overtime_hours"] == 2


def test_month_endpoint(client):
    resp = client.get("/api/employees/E1/month?year=2025&month=11")

    assert resp.status_code == 200
    assert len(resp.get_json()["data"]["rows"]) == 30


def test_bad_input_is_a_400(client):
    assert client.get("/api/employees/E1/period?start=2025-11-05").status_code == 400
    assert client.get("/api/employees/E1/period?start=05-11-2025&end=2025-11-06").status_code == 400
    assert client.get("/api/employees/E1/period?start=2025-11-06&end=2025-11-05").status_code == 400
    assert client.get("/api/overtime/recap?year=2025&month=13").status_code == 400
    assert client.get("/api/overtime/top?n=abc").status_code == 400

    body = client.get("/api/employees/E1/month?year=x&month=1").get_json()
    assert body["success"] is False
    assert "year" in body["message"]


@pytest.mark.parametrize(
    "url",
    [
        "/api/employees/E1/leave-balance?year=0",
        "/api/employees/E1/month?year=0&month=1",
        "/api/overtime/recap?year=0&month=1",
        "/api/leave-quotas?year=0",
        "/api/leave-quotas?year=10000",
    ],
)
def test_out_of_range_year_is_a_400(client, url):
    resp = client.get(url)

    assert resp.status_code == 400
    assert resp.get_json()["message"] == f"Tahun tidak valid: {url.split('year=')[1].split('&')[0]}"


def test_unknown_employee_is_a_404(client):
    resp = client.get("/api/employees/E404/leave-balance?year=2025")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_malformed_clock_value_is_a_422(client):
    resp = client.get("/api/employees/E2/period?start=2025-11-05&end=2025-11-05")

    assert resp.status_code == 422
    body = resp.get_json()
    assert body["record_id"] == "P-2"
    assert body["field"] == "clock_in_time"


def test_leave_balance_endpoint(client):
    data = client.get("/api/employees/E1/leave-balance?year=2025").get_json()["data"]

    assert data == {
        "employee_id": "E1",
        "name": "Ani",
        "year": 2025,
        "allowance": 12,
        "taken": 0,
        "remaining": 12,
    }


def test_overtime_endpoints(client):
    top = client.get("/api/overtime/top?n=1").get_json()["data"]
    assert [r["employee_id"] for r in top] == ["E2"]

    windowed = client.get("/api/overtime/top?start=2025-11-05&end=2025-11-05").get_json()["data"]
    assert [r["employee_id"] for r in windowed] == ["E1"]

    recap = client.get("/api/overtime/recap?year=2025&month=11").get_json()["data"]
    assert [(r["employee_id"], r["total_hours"]) for r in recap] == [("E2", 3.0), ("E1", 2.0)]


def test_leave_quotas_endpoint(client):
    rows = client.get("/api/leave-quotas?year=2025").get_json()["data"]

    assert [r["quota_id"] for r in rows] == ["generated-annual-E1-2025"]


def test_dashboard_endpoint(client):
    data = client.get("/api/dashboard?today=2025-11-20").get_json()["data"]

    assert data["pending_leave"] == 1
    assert data["pending_overtime"] == 0
    assert data["overtime_this_month"] == 5
    assert data["overtime_last_month"] == 0
    assert [r["employee_id"] for r in data["top_overtime"]] == ["E2", "E1"]
