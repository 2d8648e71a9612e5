"""
Exceptions raised by the AniMate core.

Every failure surfaced to callers derives from AniMateError, so a
presentation layer can catch one type and decide how to show it.
"""

from typing import Optional


class AniMateError(Exception):
    """Base class for all AniMate errors."""
    pass


class InvalidQueryError(AniMateError):
    """The search query could not be encoded into a request URL."""
    pass


class NetworkError(AniMateError):
    """Transport failure or a non-success HTTP response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(AniMateError):
    """The response body did not match the expected shape."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class MissingFieldError(DecodeError):
    """A required field was absent from the response body."""

    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field}")
        self.field = field
