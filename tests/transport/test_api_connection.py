from datetime import date

import pytest
import requests

from src.attendance_register.attendance_register.attendance.http_attendance_repository import HttpAttendanceRepository
from src.attendance_register.attendance_register.catalog.http_catalog_repository import HttpCatalogRepository
from src.attendance_register.attendance_register.core.enums import CalendarStatus
from src.attendance_register.attendance_register.core.exceptions import ApiError, SessionExpiredError
from src.attendance_register.attendance_register.staff.http_staff_repository import HttpStaffAttendanceRepository
from src.attendance_register.attendance_register.transport.connection import ApiConfig, ApiConnection
from src.attendance_register.attendance_register.transport.http_base import unwrap


class FakeResponse:
    def __init__(self, status_code=200, body=None, content=b"x"):
        self.status_code = status_code
        self._body = body
        self.content = content if body is not None or status_code >= 400 else b""
        self.text = str(body)

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _conn(*responses, token="token-1", on_unauthorized=None):
    session = FakeSession(*responses)
    conn = ApiConnection(
        ApiConfig(base_url="http://api.test/api/", timeout=5),
        session=session,
        token_provider=lambda: token,
        on_unauthorized=on_unauthorized,
    )
    return conn, session


def test_envelope_is_unwrapped_and_token_sent():
    conn, session = _conn(FakeResponse(body={"responseObject": [{"id": 1}], "error": False}))

    assert conn.get("/course/batch/b1", params={"x": None, "y": 2}) == [{"id": 1}]

    method, url, kwargs = session.requests[0]
    assert (method, url) == ("GET", "http://api.test/api/course/batch/b1")
    assert kwargs["headers"]["Authorization"] == "Bearer token-1"
    assert kwargs["params"] == {"y": "2"}
    assert kwargs["timeout"] == 5


def test_no_token_no_authorization_header():
    conn, session = _conn(FakeResponse(body={"ok": True}), token=None)
    assert conn.get("/ping") == {"ok": True}
    assert "Authorization" not in session.requests[0][2]["headers"]


def test_error_envelope_raises():
    conn, _ = _conn(FakeResponse(body={"error": True, "errorMessage": "Duplicate attendance"}))
    with pytest.raises(ApiError, match="Duplicate attendance"):
        conn.post("/attendance", {})


def test_unauthorized_calls_logout_once_and_raises():
    logouts = []
    conn, _ = _conn(FakeResponse(status_code=401, body={}), on_unauthorized=lambda: logouts.append(1))

    with pytest.raises(SessionExpiredError) as exc:
        conn.get("/attendance/register")

    assert exc.value.status_code == 401
    assert logouts == [1]


def test_http_error_and_network_error():
    conn, _ = _conn(FakeResponse(status_code=500, body={"message": "boom"}))
    with pytest.raises(ApiError) as exc:
        conn.get("/x")
    assert exc.value.status_code == 500
    assert not isinstance(exc.value, SessionExpiredError)

    conn, _ = _conn(requests.exceptions.ConnectionError("down"))
    with pytest.raises(ApiError, match="Network error"):
        conn.get("/x")


def test_empty_body_and_invalid_json():
    conn, _ = _conn(FakeResponse(status_code=204))
    assert conn.put("/attendance", {"id": 1}) is None

    conn, _ = _conn(FakeResponse(body=ValueError("not json")))
    with pytest.raises(ApiError, match="Invalid response"):
        conn.get("/x")


def test_unwrap_passes_plain_bodies():
    assert unwrap([1, 2]) == [1, 2]
    assert unwrap({"id": 3}) == {"id": 3}
    assert unwrap({"responseObject": None, "error": False}) is None


def test_roster_without_section_uses_all_segment():
    conn, session = _conn(FakeResponse(body={"responseObject": [{"studentId": "s-1"}, "junk"]}))

    rows = HttpAttendanceRepository(conn).list_roster_students(course_id="c 5", year="2024/25", batch_id="b1")

    assert rows == [{"studentId": "s-1"}]
    method, url, kwargs = session.requests[0]
    assert url == "http://api.test/api/attendance/course/c%205/year/2024%2F25/section/all"
    assert kwargs["params"] == {"batchId": "b1"}


def test_daily_record_lookup_and_create_headers():
    conn, session = _conn(
        FakeResponse(body={"responseObject": {"id": "rec-1", "courseId": "c-5", "studentAttendance": [{"studentId": "s"}]}}),
        FakeResponse(body={"responseObject": {"id": "rec-2"}}),
        FakeResponse(body={"responseObject": None}),
    )
    repo = HttpAttendanceRepository(conn)

    record = repo.get_daily_record(course_id="c-5", year="2024-25", on_date=date(2025, 3, 10))
    assert record.record_id == "rec-1"
    assert record.has_entries
    assert session.requests[0][2]["params"] == {"date": "2025-03-10"}

    repo.create_daily_record({"courseId": "c-5"}, idempotency_key="key-1")
    assert session.requests[1][0] == "POST"
    assert session.requests[1][2]["headers"]["Idempotency-Key"] == "key-1"

    with pytest.raises(ApiError, match="Failed to save"):
        repo.create_daily_record({"courseId": "c-5"})
    with pytest.raises(ValueError):
        repo.update_daily_record({"courseId": "c-5"})


def test_register_and_event_endpoints():
    conn, session = _conn(
        FakeResponse(body={"responseObject": [{"name": "Ravi"}]}),
        FakeResponse(body={"responseObject": [{"staffId": "st-9", "attendanceDate": "2025-03-03", "inTime": "08:30"}, {"staffId": "st-9"}]}),
        FakeResponse(body={"responseObject": [{"studentId": "s-1", "date": "2025-03-04", "present": True}]}),
    )
    repo = HttpAttendanceRepository(conn)

    rows = repo.list_register_rows(course_id="c-5", year="2024-25", month_name="March", calendar_year=2025)
    staff = repo.list_staff_events(staff_id="st-9", start_date=date(2025, 3, 1), end_date=date(2025, 3, 31))
    student = repo.list_student_events(
        class_id="c-5", section="A", student_id="s-1", start_date=date(2025, 3, 1), end_date=date(2025, 3, 31)
    )

    assert rows == [{"name": "Ravi"}]
    assert session.requests[0][2]["params"] == {
        "courseId": "c-5",
        "year": "2024-25",
        "month": "March",
        "calendarYear": "2025",
    }
    assert len(staff) == 1
    assert staff[0].in_time == "08:30"
    assert session.requests[1][1].endswith("/staff/st-9/attendance")
    assert session.requests[1][2]["params"] == {"startDate": "2025-03-01", "endDate": "2025-03-31"}
    assert student[0].present is True
    assert session.requests[2][1].endswith("/attendance/class/c-5/section/A/student/s-1")


def test_catalog_and_staff_checkin_endpoints():
    conn, session = _conn(
        FakeResponse(body={"responseObject": [{"id": "c-5", "name": "Grade 5", "years": [{"name": "2024-25"}]}]}),
        FakeResponse(body={"responseObject": []}),
        FakeResponse(body={"responseObject": {"id": "sa-1"}}),
    )

    courses = HttpCatalogRepository(conn).list_courses("b1")
    staff_repo = HttpStaffAttendanceRepository(conn)
    today = staff_repo.list_for_date(date(2025, 3, 10))
    saved = staff_repo.update({"id": "sa-1"})

    assert courses[0].years[0].name == "2024-25"
    assert session.requests[0][1].endswith("/course/batch/b1")
    assert today == []
    assert session.requests[1][2]["params"] == {"date": "2025-03-10"}
    assert session.requests[2][0] == "PUT"
    assert saved == {"id": "sa-1"}


def test_student_events_with_unknown_status_still_load():
    conn, _session = _conn(
        FakeResponse(
            body={
                "responseObject": [
                    {"studentId": "s-1", "date": "2025-03-04", "status": "Late", "present": True},
                    {"studentId": "s-1", "date": "2025-03-05", "status": "A"},
                ]
            }
        ),
    )

    events = HttpAttendanceRepository(conn).list_student_events(
        class_id="c-5", section="A", student_id="s-1", start_date=date(2025, 3, 1), end_date=date(2025, 3, 31)
    )

    assert [e.calendar_status for e in events] == [CalendarStatus.PRESENT, CalendarStatus.ABSENT]


def test_catalog_path_is_configurable():
    conn, session = _conn(FakeResponse(body={"responseObject": [{"id": "c-5", "name": "Grade 5"}]}))

    courses = HttpCatalogRepository(conn, path_template="/course-catalog/batch/{batch_id}").list_courses("b 1")

    assert [c.id for c in courses] == ["c-5"]
    assert session.requests[0][1].endswith("/course-catalog/batch/b%201")
