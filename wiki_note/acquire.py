"""
Bounded acquisition loop for a suitable random article.

Each attempt fetches a random title, fetches that article's rendered HTML,
extracts its headings and checks suitability. Fetch failures and unsuitable
articles both consume one attempt; only fetch failures are followed by a
short pause. The loop never raises: it returns an ArticleCandidate or None.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Protocol

from .clock import Clock, SystemClock
from .core.headings import extract_headings
from .core.suitability import is_suitable
from .core.types import AcquisitionConfig, ArticleCandidate
from .fetch.errors import TransientFetchError
from .notify import ATTEMPT_ERROR, ATTEMPT_START, EXHAUSTED, Notifier
from .utils.logging import get_logger, log_event

DEFAULT_RETRY_DELAY = 0.5


class ArticleSource(Protocol):
    async def get_random_title(self) -> str: ...

    async def get_rendered_markup(self, title: str) -> str: ...

    def article_link(self, title: str) -> str: ...


@dataclass
class AcquireStats:
    """Counters collected during one acquisition run.

    Attributes:
        attempts: Attempts consumed (errors plus unsuitable articles, plus the accepted one)
        errors: Attempts that ended in a fetch or parse failure
        unsuitable: Attempts whose article had too few headings
        accepted: Whether an article was accepted
    """
    attempts: int = 0
    errors: int = 0
    unsuitable: int = 0
    accepted: bool = False


class ArticleAcquirer:
    """Runs the fetch-parse-evaluate cycle until success or the retry bound.

    Attributes:
        source: Client providing random titles and rendered markup
        config: Settings snapshot for this run
        notifier: Receives attempt start, attempt error and exhaustion notices
        clock: Stamps the acceptance date
        retry_delay: Seconds to wait after a failed fetch
        stats: Counters for the most recent run
    """

    def __init__(
        self,
        source: ArticleSource,
        config: AcquisitionConfig,
        notifier: Notifier,
        clock: Clock | None = None,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        logger: logging.Logger | None = None,
    ):
        self.source = source
        self.config = config
        self.notifier = notifier
        self.clock = clock or SystemClock()
        self.retry_delay = retry_delay
        self._sleep = sleep
        self.logger = logger or get_logger("acquire")
        self.stats = AcquireStats()

    async def acquire(self) -> ArticleCandidate | None:
        """Return the first suitable article, or None once retries are used up."""
        self.stats = AcquireStats()
        max_retries = self.config.max_retries

        while self.stats.attempts < max_retries:
            attempt = self.stats.attempts + 1
            self.notifier.notify(
                ATTEMPT_START, f"Fetching... (Attempt {attempt})", attempt=attempt
            )

            try:
                title = await self.source.get_random_title()
                link = self.source.article_link(title)
                markup = await self.source.get_rendered_markup(title)
                headings = extract_headings(markup, self.config.exclusion_set)
            except TransientFetchError as exc:
                await self._record_failure(attempt, exc)
                continue
            except Exception as exc:  # noqa: BLE001
                self.logger.exception("Unexpected error during attempt %s", attempt)
                await self._record_failure(attempt, exc)
                continue

            if is_suitable(headings, self.config.min_headings):
                self.stats.attempts = attempt
                self.stats.accepted = True
                log_event(
                    self.logger,
                    "Found suitable article",
                    event="article_accepted",
                    attempt=attempt,
                    title=title,
                    heading_count=len(headings),
                )
                return ArticleCandidate(
                    title=title,
                    link=link,
                    headings=tuple(headings),
                    acquired_at=self.clock.date_prefix(),
                )

            self.stats.attempts = attempt
            self.stats.unsuitable += 1
            log_event(
                self.logger,
                "Too few headings, retrying",
                level=logging.DEBUG,
                event="article_unsuitable",
                attempt=attempt,
                title=title,
                heading_count=len(headings),
                min_headings=self.config.min_headings,
            )

        self.notifier.notify(
            EXHAUSTED,
            f"ERROR: No suitable article after {max_retries} attempts. Adjust settings.",
            max_retries=max_retries,
        )
        return None

    async def _record_failure(self, attempt: int, exc: Exception) -> None:
        self.stats.attempts = attempt
        self.stats.errors += 1
        log_event(
            self.logger,
            f"Fetch/parse error (attempt {attempt}): {exc}",
            level=logging.WARNING,
            event="attempt_error",
            attempt=attempt,
            error=f"{type(exc).__name__}: {exc}",
            url=getattr(exc, "url", None),
        )
        self.notifier.notify(
            ATTEMPT_ERROR,
            f"Parse failed (Attempt {attempt}). See log for details.",
            attempt=attempt,
            error=type(exc).__name__,
        )
        await self._sleep(self.retry_delay)


async def acquire_article(
    source: ArticleSource,
    config: AcquisitionConfig,
    notifier: Notifier,
    clock: Clock | None = None,
    retry_delay: float = DEFAULT_RETRY_DELAY,
) -> ArticleCandidate | None:
    """Convenience wrapper around ``ArticleAcquirer(...).acquire()``."""
    acquirer = ArticleAcquirer(source, config, notifier, clock=clock, retry_delay=retry_delay)
    return await acquirer.acquire()
