from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import day_key, parse_iso_date
from ..core.enums import CalendarStatus, DayStatus, RegisterSource
from ..transport.http_base import normalize_time_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one attendance mark of one person on one calendar day.

    Several events may exist for the same person and day on the calendar view
    (one per period/subject); the registers expect at most one.
    """

    person_id: str
    date: date
    present: Optional[bool] = None
    status: Optional[CalendarStatus] = None
    in_time: Optional[str] = None
    out_time: Optional[str] = None
    remarks: Optional[str] = None
    holiday: bool = False

    @property
    def date_key(self) -> str:
        return day_key(self.date)

    @property
    def has_time(self) -> bool:
        return bool(self.in_time or self.out_time)

    @property
    def calendar_status(self) -> CalendarStatus:
        if self.holiday:
            return CalendarStatus.HOLIDAY
        if self.status is not None:
            return self.status
        return CalendarStatus.PRESENT if self.present else CalendarStatus.ABSENT

    @classmethod
    def from_staff_api(cls, raw: dict[str, Any]) -> "AttendanceEvent":
        return cls(
            person_id=str(raw.get("staffId") or ""),
            date=parse_iso_date(str(raw["attendanceDate"])),
            in_time=normalize_time_text(raw.get("inTime")),
            out_time=normalize_time_text(raw.get("outTime")),
            remarks=raw.get("remarks"),
            holiday=_is_holiday(raw),
        )

    @classmethod
    def from_student_api(cls, raw: dict[str, Any]) -> "AttendanceEvent":
        status = _calendar_status(raw.get("status"))
        return cls(
            person_id=str(raw.get("studentId") or ""),
            date=parse_iso_date(str(raw["date"])),
            present=bool(raw.get("present")),
            status=status,
            remarks=raw.get("remarks"),
            holiday=_is_holiday(raw),
        )


def _calendar_status(token: Any) -> Optional[CalendarStatus]:
    try:
        return CalendarStatus.from_token(token)
    except ValueError:
        logger.warning("Unknown calendar status %r, falling back to the present flag", token)
        return None


def _is_holiday(raw: dict[str, Any]) -> bool:
    if raw.get("holiday"):
        return True
    token = str(raw.get("status") or "").strip().upper()
    return token in ("H", "HOLIDAY")


@dataclass(frozen=True)
class DayCell:
    day_of_month: int
    status: DayStatus
    in_time: Optional[str] = None
    out_time: Optional[str] = None
    time_text: Optional[str] = None

    def display(self, *, with_time: bool = False) -> str:
        if with_time and self.status == DayStatus.PRESENT and self.time_text:
            return self.time_text
        return self.status.symbol


@dataclass(frozen=True)
class CalendarDay:
    day: int
    date_key: str
    events: tuple[AttendanceEvent, ...] = ()
    status: Optional[CalendarStatus] = None


@dataclass(frozen=True)
class RegisterTotals:
    total_present: int
    total_absent: int
    total_days: int


@dataclass(frozen=True)
class RegisterRow:
    """Read-model: one person's month in a register."""

    person_name: str
    person_code: Optional[str]
    cells: tuple[DayCell, ...]
    total_days: int
    total_present: int
    total_absent: int
    source: RegisterSource = RegisterSource.CLIENT

    def to_dict(self, *, with_time: bool = False) -> dict:
        return {
            "name": self.person_name,
            "code": self.person_code,
            "days": [
                {"dayOfMonth": c.day_of_month, "status": c.status.symbol, "text": c.display(with_time=with_time)}
                for c in self.cells
            ],
            "totalDays": self.total_days,
            "totalPresent": self.total_present,
            "totalAbsent": self.total_absent,
            "source": self.source.value,
        }


@dataclass
class RosterEntry:
    """One student on the daily roster; ``present`` and ``remarks`` are edited in place."""

    student_id: str
    roll_number: Optional[int] = None
    student_name: str = ""
    father_name: Optional[str] = None
    admission_number: Optional[str] = None
    contact_number: Optional[str] = None
    present: bool = True
    remarks: str = ""
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api(cls, raw: dict[str, Any], *, fresh: bool = False) -> "RosterEntry":
        """Adopt a roster row; ``fresh`` rows default to present with empty remarks."""
        return cls(
            student_id=str(raw.get("studentId") or raw.get("id") or ""),
            roll_number=raw.get("rollNumber"),
            student_name=str(raw.get("studentName") or raw.get("name") or ""),
            father_name=raw.get("fatherName"),
            admission_number=raw.get("admissionNumber"),
            contact_number=raw.get("contactNumber"),
            present=True if fresh else bool(raw.get("present")),
            remarks="" if fresh else (raw.get("remarks") or ""),
            raw=dict(raw),
        )

    def to_api(self) -> dict[str, Any]:
        data = dict(self.raw)
        data.update(
            {
                "studentId": self.student_id,
                "rollNumber": self.roll_number,
                "studentName": self.student_name,
                "fatherName": self.father_name,
                "admissionNumber": self.admission_number,
                "contactNumber": self.contact_number,
                "present": self.present,
                "remarks": self.remarks,
            }
        )
        return data


@dataclass(frozen=True)
class RosterScope:
    """The (course, year, date, section?) a daily record belongs to."""

    batch_id: str
    course_id: str
    course_name: str
    year: str
    date: date
    section: Optional[str] = None
    grade: Optional[str] = None

    @property
    def key(self) -> str:
        return f"{self.course_id}|{self.year}|{self.section or ''}|{day_key(self.date)}"


@dataclass(frozen=True)
class DailyRecord:
    """An existing single-day attendance record as stored by the platform."""

    record_id: Optional[str]
    course_id: str
    course_name: str
    year: str
    section: Optional[str]
    date: str
    entries: tuple[dict[str, Any], ...] = ()

    @property
    def has_entries(self) -> bool:
        return bool(self.entries)

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "DailyRecord":
        return cls(
            record_id=raw.get("id") or None,
            course_id=str(raw.get("courseId") or ""),
            course_name=str(raw.get("courseName") or ""),
            year=str(raw.get("year") or ""),
            section=raw.get("section") or None,
            date=str(raw.get("date") or ""),
            entries=tuple(e for e in (raw.get("studentAttendance") or []) if isinstance(e, dict)),
        )


@dataclass(frozen=True)
class StaffIdentity:
    staff_id: str
    name: str = ""
    code: Optional[str] = None
    institution_id: Optional[str] = None


@dataclass(frozen=True)
class StudentIdentity:
    student_id: str
    class_id: str
    section: str
