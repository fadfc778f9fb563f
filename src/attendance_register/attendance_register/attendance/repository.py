from __future__ import annotations

from datetime import date
from typing import Any, Optional, Protocol, Sequence

from .model import AttendanceEvent, DailyRecord


class AttendanceRepository(Protocol):
    def get_daily_record(
        self,
        *,
        course_id: str,
        year: str,
        on_date: date,
        section: Optional[str] = None,
    ) -> Optional[DailyRecord]:
        raise NotImplementedError

    def list_roster_students(
        self,
        *,
        course_id: str,
        year: str,
        batch_id: str,
        section: Optional[str] = None,
    ) -> Sequence[dict[str, Any]]:
        """Raw student roster used when no record exists for the day."""

        raise NotImplementedError

    def create_daily_record(self, payload: dict[str, Any], *, idempotency_key: Optional[str] = None) -> Any:
        raise NotImplementedError

    def update_daily_record(self, payload: dict[str, Any]) -> Any:
        raise NotImplementedError

    def list_staff_events(self, *, staff_id: str, start_date: date, end_date: date) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def list_student_events(
        self,
        *,
        class_id: str,
        section: str,
        student_id: str,
        start_date: date,
        end_date: date,
    ) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def list_register_rows(
        self,
        *,
        course_id: str,
        year: str,
        month_name: str,
        calendar_year: int,
        section: Optional[str] = None,
    ) -> Sequence[dict[str, Any]]:
        """Server pre-aggregated register rows (statuses and totals already computed)."""

        raise NotImplementedError
