from __future__ import annotations

from dataclasses import replace
from typing import Optional

import pytest

from src.attendance_reconciliation.attendance_reconciliation.container import wire
from src.attendance_reconciliation.attendance_reconciliation.requests.model import (
    CorrectionRequest,
    LeaveRequest,
    OvertimeRequest,
    SubstitutionRequest,
)


class InMemorySchedules:
    def __init__(self, entries=()):
        self.entries = list(entries)
        self.calls = []

    def list_range(self, *, start, end, employee_id=None):
        self.calls.append((start, end, employee_id))
        return [
            e
            for e in self.entries
            if start <= e.work_date <= end and (employee_id is None or e.employee_id == employee_id)
        ]


class InMemoryAttendance:
    def __init__(self, records=()):
        self.records = list(records)

    def list_range(self, *, start, end, employee_id=None):
        return [
            r
            for r in self.records
            if start <= r.work_date <= end and (employee_id is None or r.employee_id == employee_id)
        ]


class InMemoryRequests:
    def __init__(self, items=()):
        self.items = list(items)

    def _list(self, cls, employee_id, status):
        return [
            r
            for r in self.items
            if isinstance(r, cls)
            and (employee_id is None or r.employee_id == employee_id)
            and (status is None or r.status == status)
        ]

    def get_request(self, *, kind, request_id):
        return next((r for r in self.items if r.kind == kind and r.request_id == request_id), None)

    def list_leave_requests(self, *, employee_id=None, status=None):
        return self._list(LeaveRequest, employee_id, status)

    def list_overtime_requests(self, *, employee_id=None, status=None):
        return self._list(OvertimeRequest, employee_id, status)

    def list_substitution_requests(self, *, employee_id=None, status=None):
        return self._list(SubstitutionRequest, employee_id, status)

    def list_correction_requests(self, *, employee_id=None, status=None, target_date=None, clock_type=None):
        return [
            r
            for r in self._list(CorrectionRequest, employee_id, status)
            if (target_date is None or r.target_date == target_date)
            and (clock_type is None or r.clock_type == clock_type)
        ]

    def update_status(self, *, kind, request_id, expected, status, admin_note: Optional[str] = None):
        for i, r in enumerate(self.items):
            if r.kind == kind and r.request_id == request_id:
                if r.status != expected:
                    return False
                self.items[i] = replace(
                    r,
                    status=status,
                    admin_note=admin_note if admin_note is not None else r.admin_note,
                )
                return True
        return False


class InMemoryEmployees:
    def __init__(self, employees=()):
        self.employees = list(employees)

    def get_by_id(self, employee_id):
        return next((e for e in self.employees if e.employee_id == employee_id), None)

    def list_all(self):
        return list(self.employees)

    def list_subordinates(self, manager_id):
        return [e for e in self.employees if e.manager_id == manager_id]


class InMemoryQuotas:
    def __init__(self, quotas=()):
        self.quotas = list(quotas)

    def list_all(self, *, employee_id=None):
        return [q for q in self.quotas if employee_id is None or q.employee_id == employee_id]


class InMemoryShifts:
    def __init__(self, shifts=()):
        self.shifts = list(shifts)

    def list_all(self):
        return list(self.shifts)


@pytest.fixture
def make_container():
    def _build(*, employees=(), schedules=(), attendance=(), requests=(), quotas=(), shifts=(), top_n=10):
        return wire(
            schedules_repo=InMemorySchedules(schedules),
            attendance_repo=InMemoryAttendance(attendance),
            requests_repo=InMemoryRequests(requests),
            employees_repo=InMemoryEmployees(employees),
            quotas_repo=InMemoryQuotas(quotas),
            shifts_repo=InMemoryShifts(shifts),
            top_n=top_n,
        )

    return _build
