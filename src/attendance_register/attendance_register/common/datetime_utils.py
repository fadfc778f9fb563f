from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Union

from ..core.constants import MONTH_NAMES
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD (or an ISO timestamp, time part dropped) into date."""
    return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()


def day_key(value: Union[date, datetime]) -> str:
    """Calendar day key used to match events to grid cells."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def require_month(month: int) -> int:
    month = int(month)
    if month < 1 or month > 12:
        raise ValidationError(f"Invalid month: {month}")
    return month


def days_in_month(year: int, month: int) -> int:
    """Day 0 of the next month is the last day of this one."""
    require_month(month)
    if month == 12:
        # date(year + 1, 1, 1) overflows for year 9999
        return 31
    return (date(year, month + 1, 1) - timedelta(days=1)).day


def first_weekday(year: int, month: int) -> int:
    """Day of week of the 1st, 0 = Sunday .. 6 = Saturday."""
    require_month(month)
    return date(year, month, 1).isoweekday() % 7


def month_date_range(year: int, month: int) -> tuple[date, date]:
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def month_name(month: int) -> str:
    return MONTH_NAMES[require_month(month) - 1]


def month_title(year: int, month: int) -> str:
    """E.g. 'From 01 March 2025 To 31 March 2025'."""
    start, end = month_date_range(year, month)
    name = month_name(month)
    return f"From {start.day:02d} {name} {start.year} To {end.day:02d} {name} {end.year}"


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (require_month(month) - 1) + delta
    return index // 12, index % 12 + 1


def format_clock_12h(value: datetime) -> str:
    """E.g. '09:05 AM'."""
    hours = value.hour % 12 or 12
    period = "PM" if value.hour >= 12 else "AM"
    return f"{hours:02d}:{value.minute:02d} {period}"


def short_time(value: str | None) -> str:
    """First five characters of a server time string ('08:30:00' -> '08:30')."""
    return (value or "").strip()[:5]


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now().date()


def now_local() -> datetime:
    return datetime.now()
