"""Current-time provider used for note dates and timestamps."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Protocol

DATE_FORMAT = "%Y-%m-%d"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class Clock(Protocol):
    def date_prefix(self) -> str: ...

    def timestamp(self) -> str: ...


class SystemClock:
    """Local wall-clock time formatted as ``YYYY-MM-DD`` / ``YYYY-MM-DD HH:mm:ss``."""

    def __init__(self, now: Callable[[], datetime] = datetime.now):
        self._now = now

    def date_prefix(self) -> str:
        return self._now().strftime(DATE_FORMAT)

    def timestamp(self) -> str:
        return self._now().strftime(TIMESTAMP_FORMAT)
