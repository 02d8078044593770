from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ShiftConfig:
    """A shift code as configured by the admin; `time_range` reads "HH:MM-HH:MM"."""

    shift_id: str
    code: str
    name: str
    time_range: str = ""
    color: str = ""
    group: str = ""

    @property
    def scheduled_times(self) -> tuple[Optional[str], Optional[str]]:
        start, sep, end = (self.time_range or "").partition("-")
        if not sep:
            return None, None
        return start.strip() or None, end.strip() or None
