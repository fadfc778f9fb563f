from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests

from ..core.constants import DEFAULT_TIMEOUT_SECONDS
from ..core.exceptions import ApiError, SessionExpiredError
from .http_base import clean_params, unwrap

logger = logging.getLogger(__name__)


@dataclass
class ApiConfig:
    base_url: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS


class ApiConnection:
    """Singleton-like HTTP client for the school platform API.

    The access token is read per request through ``token_provider`` so one connection
    can serve every signed-in user. A 401 calls ``on_unauthorized`` (global logout)
    and raises ``SessionExpiredError``.
    """

    _instance: Optional["ApiConnection"] = None

    def __init__(
        self,
        config: ApiConfig,
        *,
        session: Optional[requests.Session] = None,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
    ):
        self._config = config
        self._session = session or requests.Session()
        self._token_provider = token_provider
        self._on_unauthorized = on_unauthorized

    @classmethod
    def get_instance(cls, config: ApiConfig) -> "ApiConnection":
        if cls._instance is None:
            cls._instance = ApiConnection(config)
        return cls._instance

    def set_token_provider(self, provider: Optional[Callable[[], Optional[str]]]) -> None:
        self._token_provider = provider

    def set_logout_callback(self, callback: Optional[Callable[[], None]]) -> None:
        self._on_unauthorized = callback

    def get(self, path: str, *, params: Optional[dict] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, payload: Any, *, headers: Optional[dict] = None) -> Any:
        return self.request("POST", path, json=payload, headers=headers)

    def put(self, path: str, payload: Any, *, headers: Optional[dict] = None) -> Any:
        return self.request("PUT", path, json=payload, headers=headers)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
        json: Any = None,
        headers: Optional[dict] = None,
    ) -> Any:
        url = f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"
        all_headers = {"Content-Type": "application/json", "Accept": "application/json"}
        token = self._token_provider() if self._token_provider else None
        if token:
            all_headers["Authorization"] = f"Bearer {token}"
        if headers:
            all_headers.update(headers)

        try:
            response = self._session.request(
                method,
                url,
                params=clean_params(params),
                json=json,
                headers=all_headers,
                timeout=self._config.timeout,
            )
        except requests.exceptions.RequestException as exc:
            logger.exception("Network error on %s %s", method, path)
            raise ApiError("Network error, please try again") from exc

        if response.status_code == 401:
            logger.warning("Unauthorized response on %s %s, ending session", method, path)
            if self._on_unauthorized:
                self._on_unauthorized()
            raise SessionExpiredError("Session expired", status_code=401)

        if response.status_code >= 400:
            logger.error("Request %s %s failed. Status: %s, Response: %s", method, path, response.status_code, response.text)
            raise ApiError(f"Request failed ({response.status_code})", status_code=response.status_code)

        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError as exc:
            raise ApiError("Invalid response from server", status_code=response.status_code) from exc
        return unwrap(body)
