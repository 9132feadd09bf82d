"""
User-facing progress and failure notifications.

The acquisition loop reports through a ``Notifier`` at three points:
attempt start, per-attempt error and terminal exhaustion. The runner adds
a few of its own (start of a run, note created, nothing found).
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from rich.console import Console

from .utils.logging import log_event

ATTEMPT_START = "attempt_start"
ATTEMPT_ERROR = "attempt_error"
EXHAUSTED = "exhausted"

_STYLES = {
    ATTEMPT_START: "dim",
    ATTEMPT_ERROR: "yellow",
    EXHAUSTED: "bold red",
    "not_found": "red",
    "write_failed": "bold red",
    "created": "green",
}


class Notifier(Protocol):
    def notify(self, event: str, message: str, **fields: Any) -> None: ...


class ConsoleNotifier:
    """Prints notifications to a rich console and mirrors them to the log."""

    def __init__(self, console: Console | None = None, logger: logging.Logger | None = None):
        self.console = console or Console()
        self.logger = logger

    def notify(self, event: str, message: str, **fields: Any) -> None:
        style = _STYLES.get(event)
        self.console.print(message, style=style, markup=False, highlight=False)
        log_event(
            self.logger,
            message,
            level=logging.DEBUG,
            event=event,
            **fields,
        )
