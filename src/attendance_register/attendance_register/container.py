from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.aggregator import RegisterAggregator
from .attendance.http_attendance_repository import HttpAttendanceRepository
from .attendance.reconciler import AttendanceReconciler
from .attendance.repository import AttendanceRepository
from .catalog.http_catalog_repository import HttpCatalogRepository
from .catalog.repository import CatalogRepository
from .catalog.store import CatalogStore
from .core.constants import CATALOG_PATH, DEFAULT_TIMEOUT_SECONDS
from .screens.factory import ScreenFactory
from .screens.registry import ScreenRegistry
from .screens.roster import RosterSession
from .screens.staff_checkin import StaffCheckInSession
from .staff.geofence import OfficeLocation
from .staff.http_staff_repository import HttpStaffAttendanceRepository
from .staff.repository import StaffAttendanceRepository
from .transport.connection import ApiConfig, ApiConnection


@dataclass(frozen=True)
class Container:
    conn: Optional[ApiConnection]

    catalog_repo: CatalogRepository
    attendance_repo: AttendanceRepository
    staff_attendance_repo: StaffAttendanceRepository

    catalog_store: CatalogStore
    office: OfficeLocation
    screens: ScreenFactory
    rosters: ScreenRegistry[RosterSession]
    checkins: ScreenRegistry[StaffCheckInSession]


def assemble(
    *,
    catalog_repo: CatalogRepository,
    attendance_repo: AttendanceRepository,
    staff_attendance_repo: StaffAttendanceRepository,
    office: OfficeLocation,
    conn: Optional[ApiConnection] = None,
) -> Container:
    catalog_store = CatalogStore(catalog_repo)
    screens = ScreenFactory(
        attendance=attendance_repo,
        staff_attendance=staff_attendance_repo,
        catalog=catalog_store,
        office=office,
        reconciler=AttendanceReconciler(),
        aggregator=RegisterAggregator(),
    )
    return Container(
        conn=conn,
        catalog_repo=catalog_repo,
        attendance_repo=attendance_repo,
        staff_attendance_repo=staff_attendance_repo,
        catalog_store=catalog_store,
        office=office,
        screens=screens,
        rosters=ScreenRegistry(),
        checkins=ScreenRegistry(),
    )


def build_container(*, api_config: dict, office_location: dict) -> Container:
    config = ApiConfig(
        base_url=str(api_config["base_url"]),
        timeout=float(api_config.get("timeout", DEFAULT_TIMEOUT_SECONDS)),
    )
    conn = ApiConnection.get_instance(config)

    return assemble(
        catalog_repo=HttpCatalogRepository(conn, path_template=str(api_config.get("catalog_path") or CATALOG_PATH)),
        attendance_repo=HttpAttendanceRepository(conn),
        staff_attendance_repo=HttpStaffAttendanceRepository(conn),
        office=OfficeLocation.from_settings(office_location),
        conn=conn,
    )
