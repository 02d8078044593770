from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.constants import OFF_SHIFT_CODE
from ..core.enums import ClockType, RequestStatus
from ..requests.model import CorrectionRequest
from .model import AttendanceRecord, EffectiveAttendance


def _approved_for_day(
    corrections: Iterable[CorrectionRequest],
    employee_id: Optional[str],
    work_date: Optional[date],
) -> list[CorrectionRequest]:
    out = []
    for c in corrections:
        if c.status != RequestStatus.APPROVED:
            continue
        if employee_id is not None and str(c.employee_id) != str(employee_id):
            continue
        if work_date is not None and c.target_date != work_date:
            continue
        out.append(c)
    return out


def select_correction(corrections: Sequence[CorrectionRequest], clock_type: ClockType) -> Optional[CorrectionRequest]:
    """Latest submitted wins; on equal timestamps the later one in input order wins."""
    chosen: Optional[CorrectionRequest] = None
    for c in corrections:
        if c.clock_type != clock_type:
            continue
        if chosen is None or c.submitted_at >= chosen.submitted_at:
            chosen = c
    return chosen


def ambiguous_clock_types(corrections: Iterable[CorrectionRequest]) -> list[ClockType]:
    """Clock types with more than one approved correction."""
    counts: dict[ClockType, int] = {}
    for c in corrections:
        if c.status == RequestStatus.APPROVED:
            counts[c.clock_type] = counts.get(c.clock_type, 0) + 1
    return [ct for ct in ClockType if counts.get(ct, 0) > 1]


class CorrectionMerger:
    """Overlays approved attendance corrections onto a raw attendance record."""

    def merge(
        self,
        raw: Optional[AttendanceRecord],
        corrections: Iterable[CorrectionRequest],
        *,
        employee_id: Optional[str] = None,
        work_date: Optional[date] = None,
        shift_code: str = OFF_SHIFT_CODE,
    ) -> Optional[EffectiveAttendance]:
        if raw is not None:
            employee_id = raw.employee_id
            work_date = raw.work_date

        approved = _approved_for_day(corrections, employee_id, work_date)
        if not approved:
            return raw

        if raw is None:
            if employee_id is None or work_date is None:
                first = approved[0]
                employee_id, work_date = first.employee_id, first.target_date
                approved = _approved_for_day(approved, employee_id, work_date)
            effective = AttendanceRecord(
                record_id=None,
                employee_id=str(employee_id),
                work_date=work_date,
                shift_code=shift_code,
            )
        else:
            effective = raw

        in_correction = select_correction(approved, ClockType.IN)
        if in_correction is not None:
            effective = replace(
                effective,
                clock_in_time=in_correction.corrected_time,
                clock_in_correction_id=in_correction.request_id,
            )

        out_correction = select_correction(approved, ClockType.OUT)
        if out_correction is not None:
            effective = replace(
                effective,
                clock_out_time=out_correction.corrected_time,
                clock_out_correction_id=out_correction.request_id,
            )

        return effective


def merge_corrections(
    raw: Optional[AttendanceRecord],
    corrections: Iterable[CorrectionRequest],
    *,
    employee_id: Optional[str] = None,
    work_date: Optional[date] = None,
    shift_code: str = OFF_SHIFT_CODE,
) -> Optional[AttendanceRecord]:
    return CorrectionMerger().merge(
        raw,
        corrections,
        employee_id=employee_id,
        work_date=work_date,
        shift_code=shift_code,
    )
