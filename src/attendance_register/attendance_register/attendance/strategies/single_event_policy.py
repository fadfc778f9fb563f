from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ...common.datetime_utils import day_key, days_in_month, short_time
from ...core.enums import DayStatus
from ..model import AttendanceEvent, DayCell
from .base import ReconcilePolicy


class SingleEventRegisterPolicy(ReconcilePolicy):
    """Monthly register: at most one event per person per day, matched by day key."""

    def reconcile(self, *, year: int, month: int, events: Iterable[AttendanceEvent]) -> list[DayCell]:
        first_by_key: dict[str, AttendanceEvent] = {}
        for event in events:
            first_by_key.setdefault(event.date_key, event)

        return [
            self.cell(day, first_by_key.get(day_key(date(year, month, day))))
            for day in range(1, days_in_month(year, month) + 1)
        ]

    def cell(self, day: int, event: Optional[AttendanceEvent]) -> DayCell:
        if event is None:
            return DayCell(day_of_month=day, status=DayStatus.UNMARKED)
        if event.holiday:
            status = DayStatus.HOLIDAY
        elif event.has_time:
            status = DayStatus.PRESENT
        else:
            status = DayStatus.ABSENT
        return DayCell(
            day_of_month=day,
            status=status,
            in_time=event.in_time,
            out_time=event.out_time,
            time_text=_time_text(event) if status == DayStatus.PRESENT else None,
        )


def _time_text(event: AttendanceEvent) -> str:
    in_time = short_time(event.in_time)
    out_time = short_time(event.out_time)
    if in_time and out_time:
        return f"{in_time}-{out_time}"
    if in_time:
        return in_time
    return DayStatus.PRESENT.symbol
