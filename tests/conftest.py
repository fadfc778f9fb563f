from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Optional

import pytest

from src.attendance_register.attendance_register.attendance.model import DailyRecord
from src.attendance_register.attendance_register.catalog.cascade import SelectionCascade
from src.attendance_register.attendance_register.catalog.model import Course, Section, Year
from src.attendance_register.attendance_register.catalog.store import CatalogStore
from src.attendance_register.attendance_register.users.model import UserRecord


def sample_courses() -> list[Course]:
    return [
        Course(
            id="c-5",
            name="Grade 5",
            grade="5",
            years=(
                Year(name="2024-25", sections=(Section("A"), Section("B"))),
                Year(name="2025-26"),
            ),
        ),
        Course(
            id="c-6",
            name="Grade 6",
            grade="6",
            years=(Year(name="2024-25", sections=(Section("A"),)),),
        ),
    ]


def students(count: int, *, present: bool = True, with_remarks: bool = False) -> list[dict[str, Any]]:
    return [
        {
            "studentId": f"s-{i}",
            "rollNumber": i,
            "studentName": f"Student {i}",
            "fatherName": f"Father {i}",
            "present": present,
            "remarks": "late bus" if with_remarks else "",
        }
        for i in range(1, count + 1)
    ]


class FakeCatalogRepo:
    def __init__(self, courses: Optional[list[Course]] = None):
        self._courses = courses if courses is not None else sample_courses()
        self.calls: list[str] = []

    def list_courses(self, batch_id):
        self.calls.append(batch_id)
        return list(self._courses)


class FakeAttendanceRepo:
    """In-memory attendance endpoints.

    ``hook`` runs inside every call before it returns, which lets a test change the
    selection, tear the screen down or re-enter while the call is still running.
    """

    def __init__(self):
        self.records: dict[tuple, DailyRecord] = {}
        self.roster: dict[tuple, list[dict[str, Any]]] = {}
        self.staff_events: list = []
        self.student_events: list = []
        self.register_rows: list[dict[str, Any]] = []
        self.created: list[tuple[dict, Optional[str]]] = []
        self.updated: list[dict] = []
        self.calls: list[tuple[str, dict]] = []
        self.hook: Optional[Callable[[str], None]] = None
        self.fail_with: Optional[Exception] = None

    def _call(self, name: str, **kwargs):
        self.calls.append((name, kwargs))
        if self.hook is not None:
            self.hook(name)
        if self.fail_with is not None:
            raise self.fail_with

    def get_daily_record(self, *, course_id, year, on_date, section=None):
        self._call("get_daily_record", course_id=course_id, year=year, on_date=on_date, section=section)
        return self.records.get((course_id, year, section, on_date.isoformat()))

    def list_roster_students(self, *, course_id, year, batch_id, section=None):
        self._call("list_roster_students", course_id=course_id, year=year, batch_id=batch_id, section=section)
        return [dict(s) for s in self.roster.get((course_id, year, section), [])]

    def create_daily_record(self, payload, *, idempotency_key=None):
        self._call("create_daily_record", idempotency_key=idempotency_key)
        self.created.append((payload, idempotency_key))
        return {"id": "new-record"}

    def update_daily_record(self, payload):
        self._call("update_daily_record")
        self.updated.append(payload)
        return payload

    def list_staff_events(self, *, staff_id, start_date, end_date):
        self._call("list_staff_events", staff_id=staff_id, start_date=start_date, end_date=end_date)
        return list(self.staff_events)

    def list_student_events(self, *, class_id, section, student_id, start_date, end_date):
        self._call(
            "list_student_events",
            class_id=class_id,
            section=section,
            student_id=student_id,
            start_date=start_date,
            end_date=end_date,
        )
        return list(self.student_events)

    def list_register_rows(self, *, course_id, year, month_name, calendar_year, section=None):
        self._call(
            "list_register_rows",
            course_id=course_id,
            year=year,
            month_name=month_name,
            calendar_year=calendar_year,
            section=section,
        )
        return list(self.register_rows)


class FakeStaffAttendanceRepo:
    def __init__(self):
        self.rows: list[dict[str, Any]] = []
        self.created: list[dict] = []
        self.updated: list[dict] = []

    def list_for_date(self, on_date):
        return [dict(r) for r in self.rows if r.get("attendanceDate") == on_date.isoformat()]

    def create(self, payload):
        self.created.append(payload)
        self.rows.append({**payload, "id": f"sa-{len(self.created)}"})
        return {"id": f"sa-{len(self.created)}"}

    def update(self, payload):
        self.updated.append(payload)
        self.rows = [payload if r.get("id") == payload["id"] else r for r in self.rows]
        return payload


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def catalog_repo():
    return FakeCatalogRepo()


@pytest.fixture
def catalog_store(catalog_repo):
    return CatalogStore(catalog_repo)


@pytest.fixture
def cascade(catalog_store):
    return SelectionCascade(catalog_store.get("batch-1"))


@pytest.fixture
def attendance_repo():
    return FakeAttendanceRepo()


@pytest.fixture
def staff_repo():
    return FakeStaffAttendanceRepo()


@pytest.fixture
def staff_user():
    return UserRecord(
        user_id="u-1",
        batch_id="batch-1",
        institution_id="inst-1",
        access_token="token-1",
        staff_id="st-9",
        staff_name="Asha Rao",
        staff_code="EMP-9",
    )


@pytest.fixture
def student_user():
    return UserRecord(
        user_id="u-2",
        batch_id="batch-1",
        access_token="token-2",
        student_id="s-1",
        class_id="c-5",
        section="A",
    )


@pytest.fixture
def make_students():
    return students


@pytest.fixture
def fixed_clock():
    return FixedClock
