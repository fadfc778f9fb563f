from __future__ import annotations


class DomainError(Exception):
    """Base exception for engine errors."""


class ValidationError(DomainError):
    """Raised when input or selection is invalid; no request is sent."""


class BusyError(ValidationError):
    """Raised when the same action for the same scope is already in flight."""


class ApiError(DomainError):
    """Raised when a request fails at the transport or the server reports an error."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SessionExpiredError(ApiError):
    """Raised on 401; logging out is handled by the registered callback."""
