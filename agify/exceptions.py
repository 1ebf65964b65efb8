"""Exception hierarchy for the agify client."""

from __future__ import annotations

from agify.models import RateLimit


class AgifyError(Exception):
    """Base exception for all agify client errors.

    ``rate_limit`` is set whenever the service answered, including on error
    statuses. It is *None* only when no response was received.
    """

    def __init__(self, message: str, rate_limit: RateLimit | None = None) -> None:
        self.message = message
        self.rate_limit = rate_limit
        super().__init__(message)


class TransportError(AgifyError):
    """Raised when the request could not be completed."""


class ReadError(AgifyError):
    """Raised when the response body could not be read."""


class DecodeError(AgifyError):
    """Raised when a response body does not have the expected JSON shape."""

    def __init__(
        self,
        message: str,
        rate_limit: RateLimit | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, rate_limit)
        self.status_code = status_code


class ServiceError(AgifyError):
    """Raised on a non-200 response carrying an ``{"error": ...}`` payload."""

    def __init__(
        self,
        status_code: int,
        message: str,
        rate_limit: RateLimit | None = None,
    ) -> None:
        super().__init__(message, rate_limit)
        self.status_code = status_code

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"


class AuthenticationError(ServiceError):
    """Raised on 401 or 403 responses."""


class ValidationError(ServiceError):
    """Raised on 400 or 422 responses."""


class RateLimitError(ServiceError):
    """Raised on 429 responses."""
