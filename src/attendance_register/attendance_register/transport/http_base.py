from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import quote

from ..core.exceptions import ApiError


def unwrap(body: Any) -> Any:
    """Return the ``responseObject`` of the platform's response envelope.

    Bodies that are not enveloped are returned as they are. An envelope with a truthy
    ``error`` is a server-reported failure.
    """

    if not isinstance(body, dict):
        return body
    if body.get("error"):
        message = body.get("errorMessage") or body.get("message") or "Request failed"
        raise ApiError(str(message))
    if "responseObject" in body:
        return body["responseObject"]
    return body


def clean_params(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, str]]:
    if not params:
        return None
    return {k: str(v) for k, v in params.items() if v is not None and v != ""}


def as_list(value: Any) -> List[Dict[str, Any]]:
    if isinstance(value, list):
        return [v for v in value if isinstance(v, dict)]
    return []


def as_dict(value: Any) -> Optional[Dict[str, Any]]:
    return value if isinstance(value, dict) else None


def segment(value: Any) -> str:
    """URL-encode one path segment (year names contain spaces and slashes)."""
    return quote(str(value), safe="")


def normalize_time_text(value: Any) -> Optional[str]:
    """Normalize in/out time values to a stripped string, or None when blank."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None
