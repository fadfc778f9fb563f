from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import require_month, today_local
from ..common.serializers import slots_to_list
from ..common.web import int_arg, json_view, ok
from ..container import Container
from .builder import CalendarGridBuilder


def register(app: Flask, container: Container) -> None:
    @app.route("/api/calendar/grid", methods=["GET"], endpoint="api_calendar_grid")
    @json_view
    def api_calendar_grid():
        today = today_local()
        year = int_arg(request.args, "year", today.year)
        month = require_month(int_arg(request.args, "month", today.month))
        slots = CalendarGridBuilder.build(year, month)
        return ok(
            year=year,
            month=month,
            weekdays=list(CalendarGridBuilder.weekday_labels()),
            slots=slots_to_list(slots),
            weeks=[slots_to_list(week) for week in CalendarGridBuilder.rows(slots)],
        )
