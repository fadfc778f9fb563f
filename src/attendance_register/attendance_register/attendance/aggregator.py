from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from ..core.enums import CalendarStatus, DayStatus, RegisterSource
from .model import AttendanceEvent, DayCell, RegisterRow, RegisterTotals, RosterEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarSummary:
    total: int
    present: int
    absent: int
    leave: int
    holiday: int
    percentage: int


@dataclass(frozen=True)
class RosterSummary:
    total: int
    present: int
    absent: int


class RegisterAggregator:
    """Reduces day cells into totals and assembles register rows.

    Rows are either aggregated here from raw events (``build_row``) or taken from the
    server as they are (``from_server``); each row records which path produced it.
    """

    def aggregate(self, cells: Sequence[DayCell]) -> RegisterTotals:
        present = sum(1 for c in cells if c.status == DayStatus.PRESENT)
        absent = sum(1 for c in cells if c.status == DayStatus.ABSENT)
        return RegisterTotals(total_present=present, total_absent=absent, total_days=len(cells))

    def build_row(self, *, person_name: str, person_code: Optional[str], cells: Sequence[DayCell]) -> RegisterRow:
        totals = self.aggregate(cells)
        return RegisterRow(
            person_name=person_name,
            person_code=person_code,
            cells=tuple(cells),
            total_days=totals.total_days,
            total_present=totals.total_present,
            total_absent=totals.total_absent,
            source=RegisterSource.CLIENT,
        )

    def from_server(self, raw: dict[str, Any]) -> RegisterRow:
        cells = tuple(
            DayCell(day_of_month=int(d.get("dayOfMonth") or 0), status=_server_status(d.get("status")))
            for d in (raw.get("dayRegisterList") or [])
            if isinstance(d, dict)
        )
        code = raw.get("rollNumber", raw.get("code"))
        return RegisterRow(
            person_name=str(raw.get("name") or ""),
            person_code=str(code) if code is not None else None,
            cells=cells,
            total_days=_as_int(raw.get("totalClass", raw.get("totalDays"))),
            total_present=_as_int(raw.get("totalPresent")),
            total_absent=_as_int(raw.get("totalAbsent")),
            source=RegisterSource.SERVER,
        )

    def summarize_calendar(self, events: Iterable[AttendanceEvent]) -> CalendarSummary:
        statuses = [e.calendar_status for e in events]
        present = statuses.count(CalendarStatus.PRESENT)
        holiday = statuses.count(CalendarStatus.HOLIDAY)
        total = len(statuses) - holiday
        return CalendarSummary(
            total=total,
            present=present,
            absent=statuses.count(CalendarStatus.ABSENT),
            leave=statuses.count(CalendarStatus.LEAVE),
            holiday=holiday,
            percentage=math.floor(present * 100 / total + 0.5) if total > 0 else 0,
        )

    def summarize_roster(self, entries: Iterable[RosterEntry]) -> RosterSummary:
        entries = list(entries)
        present = sum(1 for e in entries if e.present)
        return RosterSummary(total=len(entries), present=present, absent=len(entries) - present)


def _server_status(token: Any) -> DayStatus:
    try:
        return DayStatus.from_token(token)
    except ValueError:
        logger.warning("Unknown day status %r in server register, shown as unmarked", token)
        return DayStatus.UNMARKED


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
