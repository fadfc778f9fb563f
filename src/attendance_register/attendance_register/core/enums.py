from __future__ import annotations

from enum import Enum
from typing import Optional


class DayStatus(str, Enum):
    """Per-day register status (closed set, replaces the legacy 'P'/'A'/'H' tokens)."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    HOLIDAY = "HOLIDAY"
    UNMARKED = "UNMARKED"

    @property
    def symbol(self) -> str:
        return _DAY_SYMBOLS[self]

    @classmethod
    def from_token(cls, token: Optional[str]) -> "DayStatus":
        """Parse server tokens ('P', 'A', 'H', full names, null)."""
        if token is None:
            return cls.UNMARKED
        key = str(token).strip().upper()
        if not key or key == "-":
            return cls.UNMARKED
        for status, symbol in _DAY_SYMBOLS.items():
            if key == symbol or key == status.value:
                return status
        raise ValueError(f"Unknown day status token: {token!r}")


_DAY_SYMBOLS = {
    DayStatus.PRESENT: "P",
    DayStatus.ABSENT: "A",
    DayStatus.HOLIDAY: "H",
    DayStatus.UNMARKED: "-",
}


class CalendarStatus(str, Enum):
    """Statuses shown on the multi-event attendance calendar."""

    PRESENT = "Present"
    ABSENT = "Absent"
    LEAVE = "Leave"
    HOLIDAY = "Holiday"

    @classmethod
    def from_token(cls, token: Optional[str]) -> Optional["CalendarStatus"]:
        if token is None:
            return None
        key = str(token).strip().lower()
        if not key:
            return None
        for status in cls:
            if key in (status.value.lower(), status.value[0].lower()):
                return status
        raise ValueError(f"Unknown calendar status token: {token!r}")


class RosterState(str, Enum):
    """Lifecycle of the daily roster screen."""

    IDLE = "IDLE"
    FETCHING = "FETCHING"
    LOADED = "LOADED"


class RegisterSource(str, Enum):
    """Where the totals of a register row were computed."""

    CLIENT = "CLIENT"
    SERVER = "SERVER"


class Outcome(str, Enum):
    """Result of a screen fetch that did not fail."""

    LOADED = "LOADED"
    EMPTY = "EMPTY"
    STALE = "STALE"
