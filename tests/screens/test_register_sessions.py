from datetime import date

import pytest

from src.attendance_register.attendance_register.attendance.model import (
    AttendanceEvent,
    DailyRecord,
    StaffIdentity,
    StudentIdentity,
)
from src.attendance_register.attendance_register.core.enums import CalendarStatus, DayStatus, Outcome, RegisterSource
from src.attendance_register.attendance_register.core.exceptions import ValidationError
from src.attendance_register.attendance_register.screens.attendance_calendar import AttendanceCalendarSession
from src.attendance_register.attendance_register.screens.daily_record import DailyRecordSession
from src.attendance_register.attendance_register.screens.staff_register import StaffRegisterSession
from src.attendance_register.attendance_register.screens.student_register import StudentRegisterSession

STAFF = StaffIdentity(staff_id="st-9", name="Asha Rao", code="EMP-9", institution_id="inst-1")
STUDENT = StudentIdentity(student_id="s-1", class_id="c-5", section="A")


def _server_row(name, roll, statuses):
    return {
        "name": name,
        "rollNumber": roll,
        "totalClass": len(statuses),
        "totalPresent": statuses.count("P"),
        "totalAbsent": statuses.count("A"),
        "dayRegisterList": [{"dayOfMonth": i, "status": s} for i, s in enumerate(statuses, start=1)],
    }


def test_student_register_renders_server_rows(attendance_repo, cascade):
    attendance_repo.register_rows = [
        _server_row("Ravi", 1, ["P", "A", "H"]),
        _server_row("Meena", 2, ["P", "P", "H"]),
    ]
    cascade.select_course(0)
    cascade.select_year(0)
    cascade.select_section(0)
    session = StudentRegisterSession(attendance_repo, cascade, calendar_year=2025, month=3)

    assert session.view() == Outcome.LOADED

    _name, call = attendance_repo.calls[0]
    assert call == {
        "course_id": "c-5",
        "year": "2024-25",
        "month_name": "March",
        "calendar_year": 2025,
        "section": "A",
    }
    assert [r.person_name for r in session.rows] == ["Ravi", "Meena"]
    assert all(r.source == RegisterSource.SERVER for r in session.rows)
    assert session.rows[0].cells[1].status == DayStatus.ABSENT
    assert session.day_columns() == [1, 2, 3]
    assert session.heading() == "Grade 5 - 2024-25 - Section A"
    assert session.month_title() == "From 01 March 2025 To 31 March 2025"
    assert session.shown


def test_student_register_empty_and_scope_reset(attendance_repo, cascade):
    cascade.select_course(0)
    cascade.select_year(1)
    session = StudentRegisterSession(attendance_repo, cascade, calendar_year=2024, month=2)

    assert session.view() == Outcome.EMPTY
    assert session.shown
    assert session.day_columns() == list(range(1, 30))
    assert session.heading() == "Grade 5 - 2025-26"
    assert attendance_repo.calls[0][1]["section"] is None

    cascade.select_course(1)
    assert not session.shown


def test_student_register_requires_course_and_year(attendance_repo, cascade):
    cascade.select_course(0)
    session = StudentRegisterSession(attendance_repo, cascade, calendar_year=2025, month=3)
    with pytest.raises(ValidationError):
        session.view()


def test_student_register_discards_result_after_period_change(attendance_repo, cascade):
    attendance_repo.register_rows = [_server_row("Ravi", 1, ["P"])]
    cascade.select_course(0)
    cascade.select_year(0)
    session = StudentRegisterSession(attendance_repo, cascade, calendar_year=2025, month=3)
    attendance_repo.hook = lambda name: session.set_period(2025, 4)

    assert session.view() == Outcome.STALE
    assert session.rows == ()
    assert session.period == (2025, 4)


def _staff_event(day, in_time=None, out_time=None, holiday=False):
    return AttendanceEvent(person_id="st-9", date=date(2025, 3, day), in_time=in_time, out_time=out_time, holiday=holiday)


def test_staff_register_is_reconciled_and_counted(attendance_repo):
    attendance_repo.staff_events = [
        _staff_event(3, "08:30:00", "16:30:00"),
        _staff_event(4, "08:40:00"),
        _staff_event(5),
        _staff_event(8, holiday=True),
    ]
    session = StaffRegisterSession(attendance_repo, STAFF, year=2025, month=3)

    assert session.view(with_time=True) == Outcome.LOADED

    row = session.row
    assert row.source == RegisterSource.CLIENT
    assert (row.total_present, row.total_absent, row.total_days) == (2, 1, 31)
    assert row.person_code == "EMP-9"
    data = row.to_dict(with_time=session.with_time)
    assert data["days"][2]["text"] == "08:30-16:30"
    assert data["days"][3]["text"] == "08:40"
    assert data["days"][4]["text"] == "A"
    assert data["days"][7]["text"] == "H"
    assert data["days"][0]["text"] == "-"

    _name, call = attendance_repo.calls[0]
    assert call["start_date"] == date(2025, 3, 1)
    assert call["end_date"] == date(2025, 3, 31)


def test_staff_register_without_events_still_shows_blank_row(attendance_repo):
    staff = StaffIdentity(staff_id="st-9", name="Asha Rao")
    session = StaffRegisterSession(attendance_repo, staff, year=2024, month=2)

    assert session.view() == Outcome.EMPTY
    assert session.row.person_code == "-"
    assert session.row.total_days == 29
    assert session.month_title() == "From 01 February 2024 To 29 February 2024"


def test_staff_register_requires_profile(attendance_repo):
    with pytest.raises(ValidationError, match="Staff profile"):
        StaffRegisterSession(attendance_repo, None, year=2025, month=3).view()


def test_year_choices_span_ten_years():
    assert StaffRegisterSession.year_choices(2025) == list(range(2020, 2030))


def _student_event(day, status, month=3):
    return AttendanceEvent(person_id="s-1", date=date(2025, month, day), status=status)


def test_attendance_calendar(attendance_repo):
    attendance_repo.student_events = [
        _student_event(3, CalendarStatus.PRESENT),
        _student_event(3, CalendarStatus.ABSENT),
        _student_event(4, CalendarStatus.PRESENT),
        _student_event(5, CalendarStatus.HOLIDAY),
        _student_event(2, CalendarStatus.PRESENT, month=4),
    ]
    session = AttendanceCalendarSession(attendance_repo, STUDENT, year=2025, month=3)

    assert session.view() == Outcome.LOADED

    days = {d.day: d for d in session.days if d is not None}
    assert days[3].status == CalendarStatus.ABSENT
    assert days[4].status == CalendarStatus.PRESENT
    assert days[5].status == CalendarStatus.HOLIDAY
    assert session.summary.total == 3
    assert session.summary.present == 2
    assert session.summary.percentage == 67
    assert session.title() == "March 2025"
    _name, call = attendance_repo.calls[0]
    assert (call["class_id"], call["section"], call["student_id"]) == ("c-5", "A", "s-1")


def test_attendance_calendar_month_navigation(attendance_repo):
    session = AttendanceCalendarSession(attendance_repo, STUDENT, year=2025, month=1)
    session.view()

    session.previous_month()
    assert session.period == (2024, 12)
    assert session.days == ()
    assert session.summary is None

    session.next_month()
    session.next_month()
    assert session.title() == "February 2025"


def test_attendance_calendar_requires_student(attendance_repo):
    with pytest.raises(ValidationError, match="Student details"):
        AttendanceCalendarSession(attendance_repo, None, year=2025, month=3).view()


def test_daily_record_view(attendance_repo, cascade, make_students):
    attendance_repo.records[("c-5", "2024-25", None, "2025-03-10")] = DailyRecord(
        record_id="rec-1",
        course_id="c-5",
        course_name="Grade 5",
        year="2024-25",
        section=None,
        date="2025-03-10",
        entries=tuple(make_students(3, present=False)),
    )
    cascade.select_course(0)
    cascade.select_year(0)
    session = DailyRecordSession(attendance_repo, cascade, on_date=date(2025, 3, 10))

    assert session.view() == Outcome.LOADED
    assert len(session.entries()) == 3
    assert session.summary().absent == 3

    session.set_date(date(2025, 3, 11))
    assert session.record is None
    assert session.view() == Outcome.EMPTY


def test_daily_record_without_id_is_empty(attendance_repo, cascade, make_students):
    attendance_repo.records[("c-5", "2024-25", None, "2025-03-10")] = DailyRecord(
        record_id=None,
        course_id="c-5",
        course_name="Grade 5",
        year="2024-25",
        section=None,
        date="2025-03-10",
        entries=tuple(make_students(3)),
    )
    cascade.select_course(0)
    cascade.select_year(0)
    session = DailyRecordSession(attendance_repo, cascade, on_date=date(2025, 3, 10))

    assert session.view() == Outcome.EMPTY
    assert session.entries() == ()
