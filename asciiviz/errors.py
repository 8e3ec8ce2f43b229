"""Exception hierarchy shared by the renderers and the remote client."""

from __future__ import annotations


class ChartError(Exception):
    """Base class for every error raised by asciiviz."""


class InvalidDataError(ChartError, ValueError):
    """A value required for rendering is missing, non-numeric or mistyped."""

    def __init__(self, message: str, field: str | None = None, index: int | None = None):
        self.field = field
        self.index = index
        if field is not None and index is not None:
            message = f"{message} (field {field!r}, row {index})"
        super().__init__(message)


class ConfigurationError(ChartError, ValueError):
    """Options or field selectors don't match the data or each other."""


# ── Remote service ────────────────────────────────────────────────


class RemoteServiceError(ChartError):
    """Base class for chart service failures."""


class AuthError(RemoteServiceError):
    """The API key environment variable is missing or empty."""


class RemoteError(RemoteServiceError):
    """The service answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int, response_data: str = ""):
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(message)


class NetworkError(RemoteServiceError):
    """The request never got a response."""
