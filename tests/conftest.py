"""Shared fixtures and fakes for wiki-note tests."""

from __future__ import annotations

import pytest


class FixedClock:
    """Clock stub returning fixed strings."""

    def __init__(self, date: str = "2024-01-01", timestamp: str = "2024-01-01 09:30:00"):
        self.date = date
        self.stamp = timestamp
        self.date_calls = 0

    def date_prefix(self) -> str:
        self.date_calls += 1
        return self.date

    def timestamp(self) -> str:
        return self.stamp


class RecordingNotifier:
    """Notifier stub that records (event, message) pairs."""

    def __init__(self):
        self.events: list[tuple[str, str]] = []

    def notify(self, event, message, **fields):  # noqa: ANN001
        self.events.append((event, message))

    def of(self, event: str) -> list[str]:
        return [message for name, message in self.events if name == event]


class ScriptedSource:
    """Article source that replays a script, one step per attempt.

    Each step is either an exception (raised from get_random_title) or a
    (title, markup) tuple.
    """

    def __init__(self, steps):
        self.steps = list(steps)
        self.title_calls = 0
        self.markup_calls = 0

    async def get_random_title(self) -> str:
        step = self.steps[self.title_calls % len(self.steps)]
        self.title_calls += 1
        if isinstance(step, BaseException):
            raise step
        return step[0]

    async def get_rendered_markup(self, title: str) -> str:
        step = self.steps[(self.title_calls - 1) % len(self.steps)]
        self.markup_calls += 1
        return step[1]

    def article_link(self, title: str) -> str:
        return f"https://en.wikipedia.org/wiki/{title}"


def article_html(*headings: tuple[int, str]) -> str:
    body = "".join(
        f'<div class="mw-heading mw-heading{level}"><h{level}>{text}'
        f'<span class="mw-editsection">[<a href="#">edit</a>]</span></h{level}></div><p>x</p>'
        for level, text in headings
    )
    return f'<div class="mw-content-ltr mw-parser-output">{body}</div>'


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()
