from __future__ import annotations

from datetime import date
from typing import Any, Sequence

from ..common.datetime_utils import day_key
from ..core.exceptions import ApiError
from ..transport.connection import ApiConnection
from ..transport.http_base import as_list


class HttpStaffAttendanceRepository:
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def list_for_date(self, on_date: date) -> Sequence[dict[str, Any]]:
        return as_list(self._conn.get("/staff/attendance", params={"date": day_key(on_date)}))

    def create(self, payload: dict[str, Any]) -> Any:
        return _require_saved(self._conn.post("/staff/attendance", payload))

    def update(self, payload: dict[str, Any]) -> Any:
        return _require_saved(self._conn.put("/staff/attendance", payload))


def _require_saved(result: Any) -> Any:
    if not result:
        raise ApiError("Failed to save attendance")
    return result
