from __future__ import annotations

from flask import Flask, request

from ..catalog.cascade import SelectionCascade
from ..common.datetime_utils import month_name
from ..common.serializers import calendar_days_to_list, calendar_summary_to_dict, entry_to_dict, roster_summary_to_dict
from ..common.web import bool_arg, current_user, date_arg, int_arg, json_view, login_required, ok
from ..container import Container
from ..screens.staff_register import StaffRegisterSession


def apply_selection(cascade: SelectionCascade, source: dict) -> None:
    """Replay course/year/section indices in cascade order."""
    course = int_arg(source, "course")
    year = int_arg(source, "year")
    section = int_arg(source, "section")
    if course is not None:
        cascade.select_course(course)
    if year is not None:
        cascade.select_year(year)
    if section is not None:
        cascade.select_section(section)


def register(app: Flask, container: Container) -> None:
    screens = container.screens

    @app.route("/api/attendance/calendar", methods=["GET"], endpoint="api_attendance_calendar")
    @login_required
    @json_view
    def api_attendance_calendar():
        screen = screens.attendance_calendar(
            current_user(),
            year=int_arg(request.args, "year"),
            month=int_arg(request.args, "month"),
        )
        outcome = screen.view()
        year, month = screen.period
        return ok(
            outcome=outcome.value,
            title=screen.title(),
            year=year,
            month=month,
            days=calendar_days_to_list(screen.days),
            summary=calendar_summary_to_dict(screen.summary),
        )

    @app.route("/api/attendance/daily", methods=["GET"], endpoint="api_attendance_daily")
    @login_required
    @json_view
    def api_attendance_daily():
        screen = screens.daily_record(current_user(), on_date=date_arg(request.args, "date"))
        apply_selection(screen.cascade, request.args)
        outcome = screen.view()
        record = screen.record
        return ok(
            outcome=outcome.value,
            recordId=record.record_id if record else None,
            date=screen.date.isoformat() if screen.date else None,
            entries=[entry_to_dict(e) for e in screen.entries()],
            summary=roster_summary_to_dict(screen.summary()),
        )

    @app.route("/api/registers/students", methods=["GET"], endpoint="api_student_register")
    @login_required
    @json_view
    def api_student_register():
        screen = screens.student_register(
            current_user(),
            calendar_year=int_arg(request.args, "calendarYear"),
            month=int_arg(request.args, "month"),
        )
        apply_selection(screen.cascade, request.args)
        outcome = screen.view()
        calendar_year, month = screen.period
        return ok(
            outcome=outcome.value,
            heading=screen.heading(),
            title=screen.month_title(),
            monthName=month_name(month),
            calendarYear=calendar_year,
            dayColumns=screen.day_columns(),
            rows=[row.to_dict() for row in screen.rows],
        )

    @app.route("/api/registers/staff", methods=["GET"], endpoint="api_staff_register")
    @login_required
    @json_view
    def api_staff_register():
        screen = screens.staff_register(
            current_user(),
            year=int_arg(request.args, "year"),
            month=int_arg(request.args, "month"),
        )
        with_time = bool_arg(request.args, "withTime")
        outcome = screen.view(with_time=with_time)
        year, month = screen.period
        row = screen.row
        return ok(
            outcome=outcome.value,
            title=screen.month_title(),
            year=year,
            month=month,
            withTime=with_time,
            row=row.to_dict(with_time=with_time) if row else None,
        )

    @app.route("/api/registers/staff/years", methods=["GET"], endpoint="api_staff_register_years")
    @json_view
    def api_staff_register_years():
        return ok(years=StaffRegisterSession.year_choices(int_arg(request.args, "current")))
