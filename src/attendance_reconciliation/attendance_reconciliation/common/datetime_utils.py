from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional, Union

from ..core.constants import HOURS_DECIMALS
from ..core.exceptions import MalformedTimeValue, ValidationError
from .validators import require_year

_CLOCK_FORMATS = ("%H:%M", "%H:%M:%S")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_schedule_date(value: Union[str, date, datetime]) -> date:
    """Schedule rows come as DD/MM/YYYY from the dashboard, YYYY-MM-DD from the database."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    v = (value or "").strip()
    for fmt in ("%Y-%m-%d", "%d/%m/%Y"):
        try:
            return datetime.strptime(v, fmt).date()
        except ValueError:
            continue
    raise ValidationError(f"Tanggal tidak valid: {value!r}")


def as_day(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def parse_clock_time(value: Union[str, time], *, record_id: Optional[str], field: str) -> time:
    """Parse an HH:MM (or HH:MM:SS) local time.

    Raises MalformedTimeValue naming the record and field instead of guessing.
    """
    if isinstance(value, time):
        return value
    v = value.strip() if isinstance(value, str) else ""
    for fmt in _CLOCK_FORMATS:
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise MalformedTimeValue(record_id=record_id, field=field, value=value)


def format_clock_time(value: Optional[Union[str, time]]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return value


def hours_between(start: time, end: time) -> float:
    """Signed hours from start to end on the same day."""
    seconds = (end.hour * 3600 + end.minute * 60 + end.second) - (
        start.hour * 3600 + start.minute * 60 + start.second
    )
    return round(seconds / 3600, HOURS_DECIMALS)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Calendar days from start to end, both inclusive."""
    d = start
    while d <= end:
        yield d
        d += timedelta(days=1)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    if not 1 <= int(month) <= 12:
        raise ValidationError("Bulan tidak valid")
    year = require_year(year)
    start = date(year, int(month), 1)
    if month == 12:
        end = date(year, 12, 31)
    else:
        end = date(year, int(month) + 1, 1) - timedelta(days=1)
    return start, end


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
