from __future__ import annotations

from flask import Flask, jsonify, request

from ..attendance.controller import apply_selection
from ..common.serializers import catalog_to_dict, entry_to_dict, roster_summary_to_dict, selection_to_dict
from ..common.web import bool_arg, current_user, date_arg, json_view, login_required, ok
from ..container import Container
from ..core.exceptions import ValidationError
from .roster import RosterSession
from .staff_checkin import StaffCheckInSession


def roster_to_dict(screen_id: str, screen: RosterSession) -> dict:
    return {
        "screenId": screen_id,
        "state": screen.state.value,
        "date": screen.date.isoformat() if screen.date else None,
        "recordId": screen.record_id,
        "selection": selection_to_dict(screen.cascade),
        "entries": [entry_to_dict(e) for e in screen.entries],
        "summary": roster_summary_to_dict(screen.summary()),
    }


def checkin_to_dict(screen_id: str, screen: StaffCheckInSession) -> dict:
    return {
        "screenId": screen_id,
        "recordId": screen.record_id,
        "attendanceDate": screen.attendance_date.isoformat(),
        "inTime": screen.in_time,
        "outTime": screen.out_time,
        "remarks": screen.remarks,
        "distance": None if screen.distance is None else round(screen.distance),
        "withinRadius": screen.within_radius,
        "canMark": screen.can_mark,
    }


def _body() -> dict:
    return request.get_json(silent=True) or {}


def register(app: Flask, container: Container) -> None:
    screens = container.screens
    rosters = container.rosters
    checkins = container.checkins

    def owner() -> str:
        return current_user().user_id

    # Take Attendance

    @app.route("/api/rosters", methods=["POST"], endpoint="api_roster_open")
    @login_required
    @json_view
    def api_roster_open():
        user = current_user()
        screen = screens.roster(user, on_date=date_arg(_body(), "date"))
        screen_id = rosters.open(user.user_id, screen)
        return (
            jsonify({"success": True, "courses": catalog_to_dict(screen.cascade.index), **roster_to_dict(screen_id, screen)}),
            201,
        )

    @app.route("/api/rosters/<screen_id>", methods=["GET"], endpoint="api_roster_get")
    @login_required
    @json_view
    def api_roster_get(screen_id: str):
        return ok(**roster_to_dict(screen_id, rosters.get(owner(), screen_id)))

    @app.route("/api/rosters/<screen_id>/selection", methods=["POST"], endpoint="api_roster_select")
    @login_required
    @json_view
    def api_roster_select(screen_id: str):
        screen = rosters.get(owner(), screen_id)
        data = _body()
        if bool_arg(data, "clearSection"):
            screen.clear_section()
        apply_selection(screen.cascade, data)
        return ok(**roster_to_dict(screen_id, screen))

    @app.route("/api/rosters/<screen_id>/date", methods=["PUT"], endpoint="api_roster_date")
    @login_required
    @json_view
    def api_roster_date(screen_id: str):
        screen = rosters.get(owner(), screen_id)
        screen.set_date(date_arg(_body(), "date"))
        return ok(**roster_to_dict(screen_id, screen))

    @app.route("/api/rosters/<screen_id>/view", methods=["POST"], endpoint="api_roster_view")
    @login_required
    @json_view
    def api_roster_view(screen_id: str):
        screen = rosters.get(owner(), screen_id)
        outcome = screen.view()
        return ok(outcome=outcome.value, **roster_to_dict(screen_id, screen))

    @app.route("/api/rosters/<screen_id>/entries/<int:index>", methods=["PATCH"], endpoint="api_roster_edit")
    @login_required
    @json_view
    def api_roster_edit(screen_id: str, index: int):
        screen = rosters.get(owner(), screen_id)
        data = _body()
        if "present" not in data and "remarks" not in data:
            raise ValidationError("Nothing to update")
        if "present" in data:
            screen.toggle_attendance(index, bool_arg(data, "present"))
        if "remarks" in data:
            screen.update_remarks(index, str(data.get("remarks") or ""))
        return ok(**roster_to_dict(screen_id, screen))

    @app.route("/api/rosters/<screen_id>/save", methods=["POST"], endpoint="api_roster_save")
    @login_required
    @json_view
    def api_roster_save(screen_id: str):
        screen = rosters.get(owner(), screen_id)
        result = screen.save()
        message = "Attendance created successfully" if result.created else "Attendance updated successfully"
        body = roster_to_dict(screen_id, screen)
        rosters.close(owner(), screen_id)
        return ok(message=message, created=result.created, closed=True, **body)

    @app.route("/api/rosters/<screen_id>", methods=["DELETE"], endpoint="api_roster_close")
    @login_required
    @json_view
    def api_roster_close(screen_id: str):
        rosters.close(owner(), screen_id)
        return ok()

    # Staff self check-in

    @app.route("/api/checkins", methods=["POST"], endpoint="api_checkin_open")
    @login_required
    @json_view
    def api_checkin_open():
        user = current_user()
        screen = screens.staff_checkin(user)
        already_marked = screen.load()
        screen_id = checkins.open(user.user_id, screen)
        return jsonify({"success": True, "alreadyMarked": already_marked, **checkin_to_dict(screen_id, screen)}), 201

    @app.route("/api/checkins/<screen_id>", methods=["GET"], endpoint="api_checkin_get")
    @login_required
    @json_view
    def api_checkin_get(screen_id: str):
        return ok(**checkin_to_dict(screen_id, checkins.get(owner(), screen_id)))

    @app.route("/api/checkins/<screen_id>/location", methods=["POST"], endpoint="api_checkin_location")
    @login_required
    @json_view
    def api_checkin_location(screen_id: str):
        screen = checkins.get(owner(), screen_id)
        data = _body()
        if data.get("latitude") is None or data.get("longitude") is None:
            screen.location_unavailable()
        else:
            try:
                screen.update_location(float(data["latitude"]), float(data["longitude"]))
            except (TypeError, ValueError):
                raise ValidationError("Invalid location")
        return ok(**checkin_to_dict(screen_id, screen))

    @app.route("/api/checkins/<screen_id>/in", methods=["POST"], endpoint="api_checkin_in")
    @login_required
    @json_view
    def api_checkin_in(screen_id: str):
        screen = checkins.get(owner(), screen_id)
        screen.mark_in()
        return ok(**checkin_to_dict(screen_id, screen))

    @app.route("/api/checkins/<screen_id>/out", methods=["POST"], endpoint="api_checkin_out")
    @login_required
    @json_view
    def api_checkin_out(screen_id: str):
        screen = checkins.get(owner(), screen_id)
        screen.mark_out()
        return ok(**checkin_to_dict(screen_id, screen))

    @app.route("/api/checkins/<screen_id>/remarks", methods=["PUT"], endpoint="api_checkin_remarks")
    @login_required
    @json_view
    def api_checkin_remarks(screen_id: str):
        screen = checkins.get(owner(), screen_id)
        screen.remarks = str(_body().get("remarks") or "")
        return ok(**checkin_to_dict(screen_id, screen))

    @app.route("/api/checkins/<screen_id>/save", methods=["POST"], endpoint="api_checkin_save")
    @login_required
    @json_view
    def api_checkin_save(screen_id: str):
        screen = checkins.get(owner(), screen_id)
        created = screen.save()
        message = "Attendance marked successfully" if created else "Attendance updated successfully"
        return ok(message=message, created=created, **checkin_to_dict(screen_id, screen))

    @app.route("/api/checkins/<screen_id>", methods=["DELETE"], endpoint="api_checkin_close")
    @login_required
    @json_view
    def api_checkin_close(screen_id: str):
        checkins.close(owner(), screen_id)
        return ok()
