from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import day_key, days_in_month, first_weekday
from ..core.constants import WEEKDAY_LABELS


@dataclass(frozen=True)
class DaySlot:
    day: int
    date_key: str


class CalendarGridBuilder:
    """Pure (year, month) -> day grid with leading blanks, Sunday-first weeks."""

    @staticmethod
    def build(year: int, month: int) -> list[Optional[DaySlot]]:
        slots: list[Optional[DaySlot]] = [None] * first_weekday(year, month)
        for day in range(1, days_in_month(year, month) + 1):
            slots.append(DaySlot(day=day, date_key=day_key(date(year, month, day))))
        return slots

    @staticmethod
    def weekday_labels() -> tuple[str, ...]:
        return WEEKDAY_LABELS

    @staticmethod
    def rows(slots: Sequence[Optional[DaySlot]]) -> list[list[Optional[DaySlot]]]:
        """Wrap slots into weeks of seven; the last week is not padded."""
        return [list(slots[i : i + 7]) for i in range(0, len(slots), 7)]
