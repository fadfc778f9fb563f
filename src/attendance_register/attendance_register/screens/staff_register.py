from __future__ import annotations

import logging
from typing import Optional

from ..attendance.aggregator import RegisterAggregator
from ..attendance.model import RegisterRow, StaffIdentity
from ..attendance.reconciler import AttendanceReconciler
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_date_range, month_title, require_month, today_local
from ..core.constants import YEAR_CHOICES_BEFORE, YEAR_CHOICES_COUNT
from ..core.enums import Outcome
from ..core.exceptions import ValidationError
from .base import ScreenSession

logger = logging.getLogger(__name__)


class StaffRegisterSession(ScreenSession):
    """One staff member's monthly register, reconciled and counted on the client.

    The staff endpoint only returns raw per-day events, so Policy B and the
    aggregation run here, unlike the student register.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        staff: Optional[StaffIdentity],
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
        reconciler: Optional[AttendanceReconciler] = None,
        aggregator: Optional[RegisterAggregator] = None,
    ):
        super().__init__()
        today = today_local()
        self._attendance = attendance
        self._staff = staff
        self._reconciler = reconciler or AttendanceReconciler()
        self._aggregator = aggregator or RegisterAggregator()
        self._year = int(year or today.year)
        self._month = require_month(month or today.month)
        self._row: Optional[RegisterRow] = None
        self._with_time = False

    @property
    def row(self) -> Optional[RegisterRow]:
        return self._row

    @property
    def with_time(self) -> bool:
        return self._with_time

    @property
    def period(self) -> tuple[int, int]:
        return self._year, self._month

    def set_period(self, year: int, month: int) -> None:
        self._month = require_month(month)
        self._year = int(year)
        self._on_scope_change()

    def view(self, *, with_time: bool = False) -> Outcome:
        if self._staff is None or not self._staff.staff_id:
            raise ValidationError("Staff profile not loaded")

        start, end = month_date_range(self._year, self._month)
        scope_key = f"{self._staff.staff_id}|{self._year}-{self._month:02d}"
        with self._flight.guard(scope_key, "view"):
            ticket = self._ticket()
            events = self._attendance.list_staff_events(
                staff_id=self._staff.staff_id, start_date=start, end_date=end
            )
            if not self._is_fresh(ticket):
                self._discard_stale("staff register")
                return Outcome.STALE

            cells = self._reconciler.register(year=self._year, month=self._month, events=events)
            self._row = self._aggregator.build_row(
                person_name=self._staff.name,
                person_code=self._staff.code or "-",
                cells=cells,
            )
            self._with_time = with_time
            if not events:
                logger.info("No staff attendance for %s", scope_key)
                return Outcome.EMPTY
            return Outcome.LOADED

    def month_title(self) -> str:
        return month_title(self._year, self._month)

    @staticmethod
    def year_choices(current_year: Optional[int] = None) -> list[int]:
        current_year = current_year or today_local().year
        first = current_year - YEAR_CHOICES_BEFORE
        return list(range(first, first + YEAR_CHOICES_COUNT))

    def _clear(self) -> None:
        self._row = None
        self._with_time = False
