"""SDK exception types."""

from __future__ import annotations


class VidlyError(Exception):
    """Base SDK error."""


class VidlyAPIError(VidlyError):
    """API request failed.

    Parameters
    ----------
    message : str
        Error message.
    status_code : int | None, default=None
        HTTP status code if available.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class VidlyAuthError(VidlyAPIError):
    """Authentication or authorization failed."""


class VidlyValidationError(VidlyAPIError):
    """Request payload was rejected."""


class VidlyNotFoundError(VidlyAPIError):
    """Requested resource was not found."""


class VidlyConflictError(VidlyAPIError):
    """Request conflicted with current server state."""


class VidlyRateLimitError(VidlyAPIError):
    """Caller hit a rate limit."""
