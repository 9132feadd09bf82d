"""Tests for the bounded article acquisition loop."""

from __future__ import annotations

import asyncio

from wiki_note.acquire import ArticleAcquirer, acquire_article
from wiki_note.core.types import AcquisitionConfig, HeadingRecord, parse_exclusion_set
from wiki_note.fetch.errors import NetworkError, ResponseParseError, StatusError
from wiki_note.notify import ATTEMPT_ERROR, ATTEMPT_START, EXHAUSTED

from conftest import ScriptedSource, article_html

RICH = article_html((2, "History"), (2, "Geography"), (3, "Climate"))
POOR = article_html((2, "References"))


def _acquirer(source, notifier, clock, **cfg):
    delays: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        delays.append(seconds)

    acquirer = ArticleAcquirer(
        source,
        AcquisitionConfig(**cfg),
        notifier,
        clock=clock,
        retry_delay=0.5,
        sleep=fake_sleep,
    )
    return acquirer, delays


def test_zero_retries_returns_none_without_fetching(notifier, clock):
    source = ScriptedSource([("Foo", RICH)])
    acquirer, _ = _acquirer(source, notifier, clock, min_headings=0, max_retries=0)

    result = asyncio.run(acquirer.acquire())

    assert result is None
    assert source.title_calls == 0
    assert source.markup_calls == 0
    assert notifier.of(ATTEMPT_START) == []
    assert len(notifier.of(EXHAUSTED)) == 1


def test_accepts_first_suitable_article(notifier, clock):
    source = ScriptedSource([("Foo", RICH)])
    acquirer, delays = _acquirer(source, notifier, clock, min_headings=3, max_retries=5)

    result = asyncio.run(acquirer.acquire())

    assert result is not None
    assert result.title == "Foo"
    assert result.link == "https://en.wikipedia.org/wiki/Foo"
    assert result.headings == (
        HeadingRecord(2, "History"),
        HeadingRecord(2, "Geography"),
        HeadingRecord(3, "Climate"),
    )
    assert result.acquired_at == "2024-01-01"
    assert acquirer.stats.attempts == 1
    assert acquirer.stats.accepted
    assert source.title_calls == 1
    assert delays == []
    assert notifier.of(ATTEMPT_START) == ["Fetching... (Attempt 1)"]


def test_unsuitable_articles_are_retried_without_delay(notifier, clock):
    source = ScriptedSource([("Stub", POOR), ("Stub 2", POOR), ("Good", RICH)])
    acquirer, delays = _acquirer(source, notifier, clock, min_headings=2, max_retries=10)

    result = asyncio.run(acquirer.acquire())

    assert result is not None and result.title == "Good"
    assert acquirer.stats.attempts == 3
    assert acquirer.stats.unsuitable == 2
    assert acquirer.stats.errors == 0
    assert delays == []


def test_kth_attempt_success_counts_k_attempts_and_k_minus_one_errors(notifier, clock):
    k = 4
    steps = [
        NetworkError("connection reset"),
        StatusError("HTTP Error: 503", status_code=503),
        ResponseParseError("bad json"),
        ("Found", RICH),
    ]
    source = ScriptedSource(steps)
    acquirer, delays = _acquirer(source, notifier, clock, min_headings=1, max_retries=10)

    result = asyncio.run(acquirer.acquire())

    assert result is not None and result.title == "Found"
    assert acquirer.stats.attempts == k
    assert acquirer.stats.errors == k - 1
    assert len(notifier.of(ATTEMPT_ERROR)) == k - 1
    assert delays == [0.5] * (k - 1)
    assert notifier.of(ATTEMPT_START) == [f"Fetching... (Attempt {i})" for i in range(1, k + 1)]


def test_exhaustion_returns_none_after_max_retries(notifier, clock):
    source = ScriptedSource([("Stub", POOR), NetworkError("down")])
    acquirer, delays = _acquirer(source, notifier, clock, min_headings=3, max_retries=5)

    result = asyncio.run(acquirer.acquire())

    assert result is None
    assert source.title_calls == 5
    assert acquirer.stats.attempts == 5
    assert acquirer.stats.errors == 2
    assert acquirer.stats.unsuitable == 3
    assert not acquirer.stats.accepted
    assert len(delays) == 2
    assert notifier.of(EXHAUSTED) == [
        "ERROR: No suitable article after 5 attempts. Adjust settings."
    ]
    assert clock.date_calls == 0


def test_markup_errors_are_absorbed(notifier, clock):
    class FailingMarkupSource(ScriptedSource):
        async def get_rendered_markup(self, title: str) -> str:
            self.markup_calls += 1
            raise StatusError("HTTP Error: 404", status_code=404)

    source = FailingMarkupSource([("Missing", "")])
    acquirer, _ = _acquirer(source, notifier, clock, min_headings=0, max_retries=3)

    result = asyncio.run(acquirer.acquire())

    assert result is None
    assert source.markup_calls == 3
    assert len(notifier.of(ATTEMPT_ERROR)) == 3


def test_unexpected_errors_do_not_escape_the_loop(notifier, clock):
    source = ScriptedSource([RuntimeError("boom"), ("Ok", RICH)])
    acquirer, _ = _acquirer(source, notifier, clock, min_headings=1, max_retries=3)

    result = asyncio.run(acquirer.acquire())

    assert result is not None and result.title == "Ok"
    assert acquirer.stats.errors == 1


def test_exclusions_apply_before_suitability(notifier, clock):
    markup = article_html((2, "History"), (2, "See also"), (2, "References"))
    source = ScriptedSource([("Thin", markup)])
    acquirer, _ = _acquirer(
        source,
        notifier,
        clock,
        min_headings=2,
        max_retries=2,
        exclusion_set=parse_exclusion_set("See also, References"),
    )

    assert asyncio.run(acquirer.acquire()) is None
    assert acquirer.stats.unsuitable == 2


def test_min_headings_zero_accepts_article_without_headings(notifier, clock):
    source = ScriptedSource([("Empty", "")])
    acquirer, _ = _acquirer(source, notifier, clock, min_headings=0, max_retries=1)

    result = asyncio.run(acquirer.acquire())

    assert result is not None
    assert result.headings == ()


def test_acquire_article_helper_uses_given_clock(notifier, clock):
    clock.date = "2031-12-24"
    source = ScriptedSource([("Foo", RICH)])

    result = asyncio.run(
        acquire_article(source, AcquisitionConfig(min_headings=1, max_retries=1), notifier, clock=clock)
    )

    assert result is not None
    assert result.acquired_at == "2031-12-24"
