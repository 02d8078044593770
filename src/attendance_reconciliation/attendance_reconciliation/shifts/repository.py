from __future__ import annotations

from typing import Protocol, Sequence

from .model import ShiftConfig


class ShiftConfigRepository(Protocol):
    def list_all(self) -> Sequence[ShiftConfig]:
        raise NotImplementedError
