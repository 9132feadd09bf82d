"""
Error types raised by the Wikipedia fetch stage.

Every error here is transient from the acquisition loop's point of view:
it is logged, counted as a failed attempt and retried.
"""

from __future__ import annotations


class TransientFetchError(Exception):
    """Base class for failures of either Wikipedia request."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class NetworkError(TransientFetchError):
    """The request failed before a response was received."""


class FetchTimeout(NetworkError):
    """The request exceeded the configured timeout."""


class StatusError(TransientFetchError):
    """The server answered with a non-success status code."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message, url)
        self.status_code = status_code


class ResponseParseError(TransientFetchError):
    """The response body was not the JSON shape we expected."""
