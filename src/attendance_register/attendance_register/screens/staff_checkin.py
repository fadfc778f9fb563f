from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Optional

from ..attendance.model import StaffIdentity
from ..common.datetime_utils import day_key, format_clock_12h, now_local
from ..core.exceptions import ApiError, ValidationError
from ..staff.geofence import OfficeLocation
from ..staff.repository import StaffAttendanceRepository
from ..transport.http_base import normalize_time_text
from .base import ScreenSession

logger = logging.getLogger(__name__)


class StaffCheckInSession(ScreenSession):
    """Staff self attendance for today: in-time, out-time and remarks, inside the campus radius."""

    def __init__(
        self,
        staff_attendance: StaffAttendanceRepository,
        staff: Optional[StaffIdentity],
        office: OfficeLocation,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        super().__init__()
        self._repo = staff_attendance
        self._staff = staff
        self._office = office
        self._clock = clock
        self._date: date = clock().date()
        self._record_id: Optional[str] = None
        self.in_time = ""
        self.out_time = ""
        self.remarks = ""
        self._location: Optional[tuple[float, float]] = None
        self._distance: Optional[float] = None

    @property
    def record_id(self) -> Optional[str]:
        return self._record_id

    @property
    def attendance_date(self) -> date:
        return self._date

    @property
    def distance(self) -> Optional[float]:
        return self._distance

    @property
    def within_radius(self) -> bool:
        return self._location is not None and self._office.contains(*self._location)

    @property
    def can_mark(self) -> bool:
        return self.within_radius

    def load(self) -> bool:
        """Fetch today's record; returns True when attendance is already marked."""
        staff_id = self._require_staff().staff_id
        with self._flight.guard(staff_id, "load"):
            ticket = self._ticket()
            records = self._repo.list_for_date(self._date)
            if not self._is_fresh(ticket):
                self._discard_stale("check-in")
                return False

            mine = next((r for r in records if str(r.get("staffId")) == staff_id), None)
            if mine and mine.get("id"):
                self._record_id = str(mine["id"])
                self.in_time = normalize_time_text(mine.get("inTime")) or ""
                self.out_time = normalize_time_text(mine.get("outTime")) or ""
                self.remarks = mine.get("remarks") or ""
                return True
            self._clear()
            return False

    def update_location(self, latitude: float, longitude: float) -> float:
        self._location = (float(latitude), float(longitude))
        self._distance = self._office.distance_to(latitude, longitude)
        return self._distance

    def location_unavailable(self) -> None:
        self._location = None
        self._distance = None

    def mark_in(self) -> str:
        self._require_on_campus()
        if self.in_time:
            raise ValidationError("In-time is already marked for today.")
        self.in_time = format_clock_12h(self._clock())
        return self.in_time

    def mark_out(self) -> str:
        self._require_on_campus()
        if not self.in_time:
            raise ValidationError("Please mark your in-time before marking out-time.")
        if self.out_time:
            raise ValidationError("Out-time is already marked for today.")
        self.out_time = format_clock_12h(self._clock())
        return self.out_time

    def save(self) -> bool:
        """Create or update today's record; returns True when it was created."""
        self._require_on_campus()
        if not self.in_time:
            raise ValidationError('Please mark your in-time first by pressing the "In Now" button.')
        staff = self._require_staff()
        if not staff.institution_id:
            raise ValidationError("Staff information not loaded. Please try again.")

        payload: dict[str, Any] = {
            "staffId": staff.staff_id,
            "institutionId": staff.institution_id,
            "name": staff.name,
            "code": staff.code,
            "inTime": self.in_time,
            "outTime": self.out_time or "",
            "attendanceDate": day_key(self._date),
            "remarks": self.remarks.strip(),
            "latitude": self._location[0] if self._location else None,
            "longitude": self._location[1] if self._location else None,
        }
        with self._flight.guard(staff.staff_id, "save"):
            if self._record_id:
                self._repo.update({**payload, "id": self._record_id})
                created = False
            else:
                result = self._repo.create(payload)
                if isinstance(result, dict) and result.get("id"):
                    self._record_id = str(result["id"])
                created = True
        logger.info("Staff attendance %s for %s on %s", "created" if created else "updated", staff.staff_id, day_key(self._date))
        try:
            self.load()
        except ApiError:
            logger.warning("Reload after saving staff attendance failed for %s", staff.staff_id, exc_info=True)
        return created

    def _require_staff(self) -> StaffIdentity:
        if self._staff is None or not self._staff.staff_id:
            raise ValidationError("Staff information not loaded. Please try again.")
        return self._staff

    def _require_on_campus(self) -> None:
        if self._location is None:
            raise ValidationError("Please enable location services and try again.")
        if not self.within_radius:
            raise ValidationError(
                f"You are {self._distance:.0f}m away from campus. "
                f"Move within {self._office.radius:.0f}m to mark attendance."
            )

    def _clear(self) -> None:
        self._record_id = None
        self.in_time = ""
        self.out_time = ""
        self.remarks = ""
