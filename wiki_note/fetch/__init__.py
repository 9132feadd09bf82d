"""
Wikipedia fetching.

This package handles the two HTTP calls of an acquisition attempt and the
errors they can raise.
"""

from .client import WikipediaClient
from .errors import (
    FetchTimeout,
    NetworkError,
    ResponseParseError,
    StatusError,
    TransientFetchError,
)

__all__ = [
    "WikipediaClient",
    "TransientFetchError",
    "NetworkError",
    "FetchTimeout",
    "StatusError",
    "ResponseParseError",
]
