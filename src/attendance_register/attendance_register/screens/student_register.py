from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..attendance.aggregator import RegisterAggregator
from ..attendance.model import RegisterRow
from ..attendance.repository import AttendanceRepository
from ..catalog.cascade import SelectionCascade
from ..common.datetime_utils import days_in_month, month_name, month_title, require_month, today_local
from ..core.enums import Outcome
from ..core.exceptions import ValidationError
from .base import ScreenSession

logger = logging.getLogger(__name__)


class StudentRegisterSession(ScreenSession):
    """Monthly multi-student register.

    Rows come pre-aggregated from the server and are rendered as they are; nothing is
    recounted here (compare ``StaffRegisterSession``).
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        cascade: SelectionCascade,
        *,
        calendar_year: Optional[int] = None,
        month: Optional[int] = None,
        aggregator: Optional[RegisterAggregator] = None,
    ):
        super().__init__(cascade)
        today = today_local()
        self._attendance = attendance
        self._selection = cascade
        self._aggregator = aggregator or RegisterAggregator()
        self._calendar_year = int(calendar_year or today.year)
        self._month = require_month(month or today.month)
        self._rows: list[RegisterRow] = []
        self._shown = False

    @property
    def rows(self) -> Sequence[RegisterRow]:
        return tuple(self._rows)

    @property
    def shown(self) -> bool:
        return self._shown

    @property
    def period(self) -> tuple[int, int]:
        return self._calendar_year, self._month

    def set_period(self, calendar_year: int, month: int) -> None:
        self._month = require_month(month)
        self._calendar_year = int(calendar_year)
        self._on_scope_change()

    def view(self) -> Outcome:
        course = self._selection.selected_course()
        year = self._selection.selected_year()
        if course is None or year is None:
            raise ValidationError("Please select course and year")
        section = self._selection.selected_section()
        section_name = section.name if section else None

        scope_key = f"{course.id}|{year.name}|{section_name or ''}|{self._calendar_year}-{self._month:02d}"
        with self._flight.guard(scope_key, "view"):
            ticket = self._ticket()
            raw_rows = self._attendance.list_register_rows(
                course_id=course.id,
                year=year.name,
                month_name=month_name(self._month),
                calendar_year=self._calendar_year,
                section=section_name,
            )
            if not self._is_fresh(ticket):
                self._discard_stale("register")
                return Outcome.STALE

            self._rows = [self._aggregator.from_server(raw) for raw in raw_rows]
            self._shown = True
            if not self._rows:
                logger.info("No register rows for %s", scope_key)
                return Outcome.EMPTY
            return Outcome.LOADED

    def day_columns(self) -> list[int]:
        if self._rows and self._rows[0].cells:
            return [c.day_of_month for c in self._rows[0].cells]
        return list(range(1, days_in_month(self._calendar_year, self._month) + 1))

    def month_title(self) -> str:
        return month_title(self._calendar_year, self._month)

    def heading(self) -> str:
        course = self._selection.selected_course()
        year = self._selection.selected_year()
        section = self._selection.selected_section()
        if course is None or year is None:
            return ""
        text = f"{course.name} - {year.name}"
        return f"{text} - Section {section.name}" if section else text

    def _clear(self) -> None:
        self._rows = []
        self._shown = False
