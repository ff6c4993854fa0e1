"""Exception types that map directly onto proxy HTTP responses."""

from __future__ import annotations

from typing import Optional

from app.models import ErrorResponse


class ProxyError(Exception):
    """Base error carrying the HTTP status and message returned to the caller."""

    status_code: int = 500

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_body(self) -> dict:
        """Serialize to the JSON body shape used for every failure."""
        return ErrorResponse(message=self.message, details=self.details or None).model_dump(exclude_none=True)


class MethodNotAllowedError(ProxyError):
    status_code = 405


class BadRequestError(ProxyError):
    status_code = 400


class ConfigurationError(ProxyError):
    """A server-side credential or setting is missing."""
    status_code = 500


def missing_credential(env_var: str) -> ConfigurationError:
    """Build the error reported when a provider credential is not configured."""
    return ConfigurationError(f"Server configuration error: {env_var} is not set.")


class UpstreamError(ProxyError):
    """A third-party API answered with a non-success status (or no usable content)."""

    def __init__(self, message: str, *, status_code: int, details: Optional[str] = None) -> None:
        super().__init__(message, status_code=status_code, details=details)
