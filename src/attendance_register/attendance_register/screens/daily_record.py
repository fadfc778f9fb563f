from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..attendance.aggregator import RegisterAggregator, RosterSummary
from ..attendance.model import DailyRecord, RosterEntry
from ..attendance.repository import AttendanceRepository
from ..catalog.cascade import SelectionCascade
from ..common.datetime_utils import today_local
from ..core.enums import Outcome
from ..core.exceptions import ValidationError
from .base import ScreenSession

logger = logging.getLogger(__name__)


class DailyRecordSession(ScreenSession):
    """Read-only view of the attendance already recorded for one day."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        cascade: SelectionCascade,
        *,
        on_date: Optional[date] = None,
        aggregator: Optional[RegisterAggregator] = None,
    ):
        super().__init__(cascade)
        self._attendance = attendance
        self._selection = cascade
        self._aggregator = aggregator or RegisterAggregator()
        self._date: Optional[date] = on_date or today_local()
        self._record: Optional[DailyRecord] = None

    @property
    def record(self) -> Optional[DailyRecord]:
        return self._record

    @property
    def date(self) -> Optional[date]:
        return self._date

    def set_date(self, on_date: Optional[date]) -> None:
        self._date = on_date
        self._on_scope_change()

    def view(self) -> Outcome:
        course = self._selection.selected_course()
        year = self._selection.selected_year()
        if course is None or year is None:
            raise ValidationError("Please select course and year")
        if self._date is None:
            raise ValidationError("Please select date")
        section = self._selection.selected_section()
        section_name = section.name if section else None

        scope_key = f"{course.id}|{year.name}|{section_name or ''}|{self._date.isoformat()}"
        with self._flight.guard(scope_key, "view"):
            ticket = self._ticket()
            record = self._attendance.get_daily_record(
                course_id=course.id, year=year.name, on_date=self._date, section=section_name
            )
            if not self._is_fresh(ticket):
                self._discard_stale("daily record")
                return Outcome.STALE

            if record is None or not record.record_id or not record.has_entries:
                self._record = None
                logger.info("No attendance record found for %s", scope_key)
                return Outcome.EMPTY
            self._record = record
            return Outcome.LOADED

    def entries(self) -> Sequence[RosterEntry]:
        if self._record is None:
            return ()
        return tuple(RosterEntry.from_api(e) for e in self._record.entries)

    def summary(self) -> RosterSummary:
        return self._aggregator.summarize_roster(self.entries())

    def _clear(self) -> None:
        self._record = None
