from __future__ import annotations

from datetime import date
from typing import Any, Protocol, Sequence


class StaffAttendanceRepository(Protocol):
    def list_for_date(self, on_date: date) -> Sequence[dict[str, Any]]:
        """Self check-in records of every staff member for one day."""

        raise NotImplementedError

    def create(self, payload: dict[str, Any]) -> Any:
        raise NotImplementedError

    def update(self, payload: dict[str, Any]) -> Any:
        raise NotImplementedError
