from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request, session

from ..core.exceptions import ApiError, SessionExpiredError, ValidationError
from ..users.model import UserRecord
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"


def current_user() -> Optional[UserRecord]:
    return UserRecord.from_session(session.get(SESSION_USER_KEY))


def json_view(view):
    """Map engine errors to JSON responses the way every endpoint reports them."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except SessionExpiredError:
            return jsonify({"success": False, "message": "Session expired, please sign in again"}), 401
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except ApiError as e:
            logger.warning("Upstream failure in %s: %s", request.path, e)
            return jsonify({"success": False, "message": "Something went wrong, please try again"}), 502
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return jsonify({"success": False, "message": "Internal error"}), 500

    return wrapper


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def ok(**payload: Any):
    return jsonify({"success": True, **payload})


def int_arg(source: dict, name: str, default: Optional[int] = None) -> Optional[int]:
    value = source.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {name}: {value!r}")


def date_arg(source: dict, name: str) -> Optional[date]:
    value = source.get(name)
    if not value:
        return None
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {name} (YYYY-MM-DD): {value!r}")


def bool_arg(source: dict, name: str, default: bool = False) -> bool:
    value = source.get(name)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")
