from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional, Sequence

from ...calendar_grid.builder import CalendarGridBuilder
from ...core.enums import CalendarStatus
from ..model import AttendanceEvent, CalendarDay
from .base import ReconcilePolicy

# First match wins over the set of a day's statuses.
PRECEDENCE = (
    CalendarStatus.HOLIDAY,
    CalendarStatus.ABSENT,
    CalendarStatus.LEAVE,
    CalendarStatus.PRESENT,
)


class MultiEventCalendarPolicy(ReconcilePolicy):
    """Calendar view: any number of events per day, one person."""

    def day_status(self, events: Sequence[AttendanceEvent]) -> Optional[CalendarStatus]:
        statuses = {e.calendar_status for e in events}
        for status in PRECEDENCE:
            if status in statuses:
                return status
        return None

    def reconcile(self, *, year: int, month: int, events: Iterable[AttendanceEvent]) -> list[Optional[CalendarDay]]:
        by_key: dict[str, list[AttendanceEvent]] = defaultdict(list)
        for event in events:
            by_key[event.date_key].append(event)

        days: list[Optional[CalendarDay]] = []
        for slot in CalendarGridBuilder.build(year, month):
            if slot is None:
                days.append(None)
                continue
            day_events = tuple(by_key.get(slot.date_key, ()))
            days.append(
                CalendarDay(
                    day=slot.day,
                    date_key=slot.date_key,
                    events=day_events,
                    status=self.day_status(day_events),
                )
            )
        return days
