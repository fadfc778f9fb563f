from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Sequence

from ..attendance.aggregator import RegisterAggregator, RosterSummary
from ..attendance.model import RosterEntry, RosterScope
from ..attendance.repository import AttendanceRepository
from ..catalog.cascade import SelectionCascade
from ..common.datetime_utils import day_key, today_local
from ..common.validators import require_index
from ..core.enums import Outcome, RosterState
from ..core.exceptions import ValidationError
from .base import ScreenSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveResult:
    created: bool
    record_id: Optional[str]


class RosterSession(ScreenSession):
    """Daily add/edit attendance flow.

    IDLE -> FETCHING on ``view`` -> LOADED (editable) -> IDLE again on any scope
    change or after a successful ``save``.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        cascade: SelectionCascade,
        *,
        batch_id: Optional[str],
        on_date: Optional[date] = None,
        aggregator: Optional[RegisterAggregator] = None,
    ):
        super().__init__(cascade)
        self._attendance = attendance
        self._selection = cascade
        self._batch_id = batch_id
        self._aggregator = aggregator or RegisterAggregator()
        self._date: Optional[date] = on_date or today_local()
        self._state = RosterState.IDLE
        self._entries: list[RosterEntry] = []
        self._record_id: Optional[str] = None
        self._scope: Optional[RosterScope] = None
        self._loaded_epoch = 0
        self._key_salt = uuid.uuid4().hex

    @property
    def state(self) -> RosterState:
        return self._state

    @property
    def entries(self) -> Sequence[RosterEntry]:
        return tuple(self._entries)

    @property
    def record_id(self) -> Optional[str]:
        return self._record_id

    @property
    def scope(self) -> Optional[RosterScope]:
        return self._scope

    @property
    def date(self) -> Optional[date]:
        return self._date

    def select_course(self, index: int) -> None:
        self._selection.select_course(index)

    def select_year(self, index: int) -> None:
        self._selection.select_year(index)

    def select_section(self, index: int) -> None:
        self._selection.select_section(index)

    def clear_section(self) -> None:
        self._selection.clear_section()

    def set_date(self, on_date: Optional[date]) -> None:
        self._date = on_date
        self._on_scope_change()

    def view(self) -> Outcome:
        scope = self._current_scope()
        with self._flight.guard(scope.key, "view"):
            ticket = self._ticket()
            previous = self._state
            self._state = RosterState.FETCHING
            try:
                record_id, entries = self._fetch_or_initialize(scope)
            except Exception:
                if self._is_fresh(ticket):
                    self._state = previous
                raise

            if not self._is_fresh(ticket):
                self._discard_stale("roster")
                return Outcome.STALE

            if not entries:
                self._clear()
                logger.info("No students found for %s", scope.key)
                return Outcome.EMPTY

            self._entries = entries
            self._record_id = record_id
            self._scope = scope
            self._loaded_epoch = ticket.epoch
            self._state = RosterState.LOADED
            logger.info(
                "Roster loaded for %s: %s students (%s)",
                scope.key,
                len(entries),
                "existing record" if record_id else "new record",
            )
            return Outcome.LOADED

    def toggle_attendance(self, index: int, value: bool) -> None:
        self._editable_entry(index).present = bool(value)

    def update_remarks(self, index: int, text: str) -> None:
        self._editable_entry(index).remarks = text or ""

    def summary(self) -> RosterSummary:
        return self._aggregator.summarize_roster(self._entries)

    def save(self) -> SaveResult:
        if self._state != RosterState.LOADED or not self._entries or self._scope is None:
            raise ValidationError("Nothing to save, please view the roster first")

        scope = self._scope
        record_id = self._record_id
        with self._flight.guard(scope.key, "save"):
            ticket = self._ticket()
            payload = self.build_payload(scope, self._entries, record_id)
            if record_id:
                self._attendance.update_daily_record(payload)
            else:
                self._attendance.create_daily_record(payload, idempotency_key=self._idempotency_key(scope))
            logger.info("Attendance %s for %s", "updated" if record_id else "created", scope.key)

            if self._is_fresh(ticket):
                # Roster is discarded; it must be fetched again to edit.
                self._selection.reset()
            return SaveResult(created=not record_id, record_id=record_id)

    @staticmethod
    def build_payload(scope: RosterScope, entries: Sequence[RosterEntry], record_id: Optional[str]) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "batchId": scope.batch_id,
            "courseId": scope.course_id,
            "courseName": scope.course_name,
            "year": scope.year,
            "section": scope.section or "",
            "grade": scope.grade,
            "date": day_key(scope.date),
            "studentAttendance": [e.to_api() for e in entries],
        }
        if record_id:
            payload["id"] = record_id
        return payload

    def _fetch_or_initialize(self, scope: RosterScope) -> tuple[Optional[str], list[RosterEntry]]:
        record = self._attendance.get_daily_record(
            course_id=scope.course_id,
            year=scope.year,
            on_date=scope.date,
            section=scope.section,
        )
        if record is not None and record.has_entries:
            return record.record_id, [RosterEntry.from_api(e) for e in record.entries]

        students = self._attendance.list_roster_students(
            course_id=scope.course_id,
            year=scope.year,
            batch_id=scope.batch_id,
            section=scope.section,
        )
        return None, [RosterEntry.from_api(s, fresh=True) for s in students]

    def _current_scope(self) -> RosterScope:
        course = self._selection.selected_course()
        year = self._selection.selected_year()
        if course is None or year is None:
            raise ValidationError("Please select course and year")
        if self._date is None:
            raise ValidationError("Please select date")
        if not self._batch_id:
            raise ValidationError("No batch found in user data")
        section = self._selection.selected_section()
        return RosterScope(
            batch_id=self._batch_id,
            course_id=course.id,
            course_name=course.name,
            year=year.name,
            date=self._date,
            section=section.name if section else None,
            grade=course.grade,
        )

    def _editable_entry(self, index: int) -> RosterEntry:
        if self._state != RosterState.LOADED:
            raise ValidationError("No roster loaded")
        return require_index(self._entries, index, "student")

    def _idempotency_key(self, scope: RosterScope) -> str:
        return str(uuid.uuid5(uuid.NAMESPACE_URL, f"attendance/{scope.key}/{self._key_salt}/{self._loaded_epoch}"))

    def _clear(self) -> None:
        self._state = RosterState.IDLE
        self._entries = []
        self._record_id = None
        self._scope = None
