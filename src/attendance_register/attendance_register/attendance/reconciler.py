from __future__ import annotations

from typing import Iterable, Optional

from .model import AttendanceEvent, CalendarDay, DayCell
from .strategies.multi_event_policy import MultiEventCalendarPolicy
from .strategies.single_event_policy import SingleEventRegisterPolicy


class AttendanceReconciler:
    """Turns sparse events into per-day statuses for one month.

    ``calendar`` accepts several events per day, ``register`` expects at most one.
    """

    def __init__(
        self,
        *,
        calendar_policy: Optional[MultiEventCalendarPolicy] = None,
        register_policy: Optional[SingleEventRegisterPolicy] = None,
    ):
        self._calendar_policy = calendar_policy or MultiEventCalendarPolicy()
        self._register_policy = register_policy or SingleEventRegisterPolicy()

    def calendar(self, *, year: int, month: int, events: Iterable[AttendanceEvent]) -> list[Optional[CalendarDay]]:
        return self._calendar_policy.reconcile(year=year, month=month, events=events)

    def register(self, *, year: int, month: int, events: Iterable[AttendanceEvent]) -> list[DayCell]:
        return self._register_policy.reconcile(year=year, month=month, events=events)
