from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.aggregator import RegisterAggregator
from ..attendance.reconciler import AttendanceReconciler
from ..attendance.repository import AttendanceRepository
from ..catalog.cascade import SelectionCascade
from ..catalog.store import CatalogStore
from ..staff.geofence import OfficeLocation
from ..staff.repository import StaffAttendanceRepository
from ..users.model import UserRecord
from .attendance_calendar import AttendanceCalendarSession
from .daily_record import DailyRecordSession
from .roster import RosterSession
from .staff_checkin import StaffCheckInSession
from .staff_register import StaffRegisterSession
from .student_register import StudentRegisterSession


@dataclass
class ScreenFactory:
    """Factory Pattern: builds one screen instance with its own cascade over the shared catalog."""

    attendance: AttendanceRepository
    staff_attendance: StaffAttendanceRepository
    catalog: CatalogStore
    office: OfficeLocation
    reconciler: AttendanceReconciler
    aggregator: RegisterAggregator

    def cascade(self, user: UserRecord) -> SelectionCascade:
        return SelectionCascade(self.catalog.get(user.batch_id))

    def roster(self, user: UserRecord, *, on_date: Optional[date] = None) -> RosterSession:
        return RosterSession(
            self.attendance,
            self.cascade(user),
            batch_id=user.batch_id,
            on_date=on_date,
            aggregator=self.aggregator,
        )

    def daily_record(self, user: UserRecord, *, on_date: Optional[date] = None) -> DailyRecordSession:
        return DailyRecordSession(self.attendance, self.cascade(user), on_date=on_date, aggregator=self.aggregator)

    def student_register(
        self, user: UserRecord, *, calendar_year: Optional[int] = None, month: Optional[int] = None
    ) -> StudentRegisterSession:
        return StudentRegisterSession(
            self.attendance,
            self.cascade(user),
            calendar_year=calendar_year,
            month=month,
            aggregator=self.aggregator,
        )

    def staff_register(
        self, user: UserRecord, *, year: Optional[int] = None, month: Optional[int] = None
    ) -> StaffRegisterSession:
        return StaffRegisterSession(
            self.attendance,
            user.staff_identity(),
            year=year,
            month=month,
            reconciler=self.reconciler,
            aggregator=self.aggregator,
        )

    def attendance_calendar(
        self, user: UserRecord, *, year: Optional[int] = None, month: Optional[int] = None
    ) -> AttendanceCalendarSession:
        return AttendanceCalendarSession(
            self.attendance,
            user.student_identity(),
            year=year,
            month=month,
            reconciler=self.reconciler,
            aggregator=self.aggregator,
        )

    def staff_checkin(self, user: UserRecord) -> StaffCheckInSession:
        return StaffCheckInSession(self.staff_attendance, user.staff_identity(), self.office)
