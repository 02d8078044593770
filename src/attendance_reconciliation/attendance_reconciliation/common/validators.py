from __future__ import annotations

from datetime import MAXYEAR, MINYEAR, date
from typing import Optional

from ..core.exceptions import ValidationError


def require_date_range(start: date, end: date) -> None:
    if end < start:
        raise ValidationError("Tanggal akhir harus >= tanggal awal")


def require_year(year: int) -> int:
    if not MINYEAR <= int(year) <= MAXYEAR:
        raise ValidationError(f"Tahun tidak valid: {year}")
    return int(year)


def optional_note(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None
