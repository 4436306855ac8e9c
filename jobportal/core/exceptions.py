"""
Exception hierarchy for the job portal client.
"""

from typing import Any, Dict, Optional


class PortalError(Exception):
    """Base class for all job portal client errors."""


class ConfigurationError(PortalError):
    """Raised when client settings cannot be loaded."""


class ApiError(PortalError):
    """An HTTP call failed, either in transport or with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class SessionExpiredError(ApiError):
    """The backend answered 401; the session has already been cleared."""


__all__ = [
    'PortalError',
    'ConfigurationError',
    'ApiError',
    'SessionExpiredError'
]
