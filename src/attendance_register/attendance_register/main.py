from __future__ import annotations

import importlib
import logging
import logging.config
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, has_request_context, session

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .catalog.controller import register as register_catalog
from .calendar_grid.controller import register as register_calendar_grid
from .common.web import SESSION_USER_KEY, current_user
from .container import Container, build_container
from .screens.controller import register as register_screens

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.config.dictConfig(getattr(settings, "LOGGING"))
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        api_config = getattr(settings, "API_CONFIG")
        container = build_container(api_config=api_config, office_location=getattr(settings, "OFFICE_LOCATION"))
        logger.info("settings=%s api=%s", settings_module, api_config.get("base_url"))

    if container.conn is not None:
        container.conn.set_token_provider(_session_token)
        container.conn.set_logout_callback(lambda: _logout(container))

    register_catalog(app, container)
    register_calendar_grid(app, container)
    register_attendance(app, container)
    register_screens(app, container)

    return app


def _session_token() -> Optional[str]:
    if not has_request_context():
        return None
    user = current_user()
    return user.access_token if user else None


def _logout(container: Container) -> None:
    """Global logout on 401: drop the user's open screens and session."""
    if not has_request_context():
        return
    user = current_user()
    if user is not None:
        closed = container.rosters.close_all(user.user_id) + container.checkins.close_all(user.user_id)
        logger.info("Session expired for user %s, closed %d screen(s)", user.user_id, closed)
    session.pop(SESSION_USER_KEY, None)
