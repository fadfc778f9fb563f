from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import day_key
from ..core.constants import ALL_SECTIONS
from ..core.exceptions import ApiError
from ..transport.connection import ApiConnection
from ..transport.http_base import as_dict, as_list, segment
from .model import AttendanceEvent, DailyRecord


class HttpAttendanceRepository:
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def get_daily_record(
        self,
        *,
        course_id: str,
        year: str,
        on_date: date,
        section: Optional[str] = None,
    ) -> Optional[DailyRecord]:
        data = self._conn.get(
            f"/attendance/course/{segment(course_id)}/year/{segment(year)}",
            params={"date": day_key(on_date), "section": section},
        )
        raw = as_dict(data)
        return DailyRecord.from_api(raw) if raw else None

    def list_roster_students(
        self,
        *,
        course_id: str,
        year: str,
        batch_id: str,
        section: Optional[str] = None,
    ) -> Sequence[dict[str, Any]]:
        data = self._conn.get(
            f"/attendance/course/{segment(course_id)}/year/{segment(year)}/section/{segment(section or ALL_SECTIONS)}",
            params={"batchId": batch_id},
        )
        return as_list(data)

    def create_daily_record(self, payload: dict[str, Any], *, idempotency_key: Optional[str] = None) -> Any:
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else None
        return _require_saved(self._conn.post("/attendance", payload, headers=headers))

    def update_daily_record(self, payload: dict[str, Any]) -> Any:
        if not payload.get("id"):
            raise ValueError("update requires the record id")
        return _require_saved(self._conn.put("/attendance", payload))

    def list_staff_events(self, *, staff_id: str, start_date: date, end_date: date) -> Sequence[AttendanceEvent]:
        data = self._conn.get(
            f"/staff/{segment(staff_id)}/attendance",
            params={"startDate": day_key(start_date), "endDate": day_key(end_date)},
        )
        return [AttendanceEvent.from_staff_api(raw) for raw in as_list(data) if raw.get("attendanceDate")]

    def list_student_events(
        self,
        *,
        class_id: str,
        section: str,
        student_id: str,
        start_date: date,
        end_date: date,
    ) -> Sequence[AttendanceEvent]:
        data = self._conn.get(
            f"/attendance/class/{segment(class_id)}/section/{segment(section)}/student/{segment(student_id)}",
            params={"startDate": day_key(start_date), "endDate": day_key(end_date)},
        )
        return [AttendanceEvent.from_student_api(raw) for raw in as_list(data) if raw.get("date")]

    def list_register_rows(
        self,
        *,
        course_id: str,
        year: str,
        month_name: str,
        calendar_year: int,
        section: Optional[str] = None,
    ) -> Sequence[dict[str, Any]]:
        data = self._conn.get(
            "/attendance/register",
            params={
                "courseId": course_id,
                "year": year,
                "month": month_name,
                "calendarYear": calendar_year,
                "section": section,
            },
        )
        return as_list(data)


def _require_saved(result: Any) -> Any:
    if not result:
        raise ApiError("Failed to save attendance")
    return result
