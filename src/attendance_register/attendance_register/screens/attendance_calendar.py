from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..attendance.aggregator import CalendarSummary, RegisterAggregator
from ..attendance.model import CalendarDay, StudentIdentity
from ..attendance.reconciler import AttendanceReconciler
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_date_range, month_name, require_month, shift_month, today_local
from ..core.enums import Outcome
from ..core.exceptions import ValidationError
from .base import ScreenSession

logger = logging.getLogger(__name__)


class AttendanceCalendarSession(ScreenSession):
    """A student's own month calendar (several events per day allowed)."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        student: Optional[StudentIdentity],
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
        reconciler: Optional[AttendanceReconciler] = None,
        aggregator: Optional[RegisterAggregator] = None,
    ):
        super().__init__()
        today = today_local()
        self._attendance = attendance
        self._student = student
        self._reconciler = reconciler or AttendanceReconciler()
        self._aggregator = aggregator or RegisterAggregator()
        self._year = int(year or today.year)
        self._month = require_month(month or today.month)
        self._days: list[Optional[CalendarDay]] = []
        self._summary: Optional[CalendarSummary] = None

    @property
    def days(self) -> Sequence[Optional[CalendarDay]]:
        return tuple(self._days)

    @property
    def summary(self) -> Optional[CalendarSummary]:
        return self._summary

    @property
    def period(self) -> tuple[int, int]:
        return self._year, self._month

    def title(self) -> str:
        return f"{month_name(self._month)} {self._year}"

    def previous_month(self) -> None:
        self._year, self._month = shift_month(self._year, self._month, -1)
        self._on_scope_change()

    def next_month(self) -> None:
        self._year, self._month = shift_month(self._year, self._month, 1)
        self._on_scope_change()

    def view(self) -> Outcome:
        student = self._student
        if student is None or not (student.class_id and student.section and student.student_id):
            raise ValidationError("Student details not available")

        start, end = month_date_range(self._year, self._month)
        scope_key = f"{student.student_id}|{self._year}-{self._month:02d}"
        with self._flight.guard(scope_key, "view"):
            ticket = self._ticket()
            events = self._attendance.list_student_events(
                class_id=student.class_id,
                section=student.section,
                student_id=student.student_id,
                start_date=start,
                end_date=end,
            )
            if not self._is_fresh(ticket):
                self._discard_stale("calendar")
                return Outcome.STALE

            events = [e for e in events if start <= e.date <= end]
            self._days = self._reconciler.calendar(year=self._year, month=self._month, events=events)
            self._summary = self._aggregator.summarize_calendar(events)
            return Outcome.LOADED if events else Outcome.EMPTY

    def _clear(self) -> None:
        self._days = []
        self._summary = None
