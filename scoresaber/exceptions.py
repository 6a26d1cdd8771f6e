"""Custom exceptions for the ScoreSaber client."""

from typing import Optional


class ScoreSaberError(Exception):
    """Base class for errors raised by the client."""

    def __init__(self, message: str = "ScoreSaber client error"):
        self.message = message
        super().__init__(message)


class TransportError(ScoreSaberError):
    """Raised when a request fails after the transport retries are used up.

    Covers network errors, timeouts and non-2xx responses. The underlying
    ``httpx`` exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        url: str,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        self.url = url
        self.status_code = status_code
        message = f"Request to {url} failed"
        if status_code is not None:
            message += f" with HTTP {status_code}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class MissingRateLimitHeader(ScoreSaberError):
    """Raised when a response lacks a usable rate limit reset header."""

    def __init__(self, url: str, header: str):
        self.url = url
        self.header = header
        super().__init__(f"Response from {url} is missing the {header} header")
