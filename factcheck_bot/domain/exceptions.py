"""Domain exceptions for claim verification and message routing."""

from typing import Optional


class FactCheckBotError(Exception):
    """Base class for all domain errors."""


class InvalidInputError(FactCheckBotError):
    """Raised when a request carries unusable input (e.g. an empty claim)."""


class ConfigurationError(FactCheckBotError):
    """Raised when a required credential or setting is missing."""


class RecordNotFoundError(FactCheckBotError):
    """Raised when a stored record cannot be found."""


class UpstreamError(FactCheckBotError):
    """Raised when an external service call fails.

    Carries the upstream status code (when there was a response) so callers
    can log it or map it onto their own error surface.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (status {self.status_code})"
        return self.message


class RateLimitedError(UpstreamError):
    """Upstream answered 429. The caller may retry later."""


class UnauthorizedError(UpstreamError):
    """Upstream answered 403 (invalid key or exhausted quota)."""


class UpstreamTimeoutError(UpstreamError):
    """Upstream did not answer within the request timeout."""
