"""
Run orchestration for wiki-note.

This module coordinates one run:
1. Set up logging
2. Acquire a suitable random article
3. Render the Markdown note
4. Write it into the vault (creating the note folder if needed)
5. Optionally open the new note

Failures while writing are reported and re-raised; the acquisition stage
never raises.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.console import Console

from .acquire import AcquireStats, ArticleAcquirer, ArticleSource
from .clock import Clock, SystemClock
from .config import AppConfig
from .core.types import ArticleCandidate
from .fetch.client import WikipediaClient
from .notify import ConsoleNotifier, Notifier
from .output.renderer import note_filename, render_note
from .output.writer import open_note, write_note
from .utils.logging import log_event, setup_logging


def run_once(
    cfg: AppConfig,
    vault_dir: Path,
    console: Console | None = None,
    source: ArticleSource | None = None,
    clock: Clock | None = None,
    notifier: Notifier | None = None,
) -> Path | None:
    """Fetch one suitable random article and save it as a note.

    Args:
        cfg: Application configuration
        vault_dir: Directory the note folder is resolved against
        console: Rich console for output (creates default if None)
        source: Article source; a WikipediaClient is created when None
        clock: Time provider for the note date and timestamp
        notifier: Notification sink (defaults to a ConsoleNotifier)

    Returns:
        Path to the created note, or None when no suitable article was found

    Raises:
        OSError: If the note folder or file cannot be created
    """
    console = console or Console()
    logger = setup_logging(cfg.logging, vault_dir, console=console)
    clock = clock or SystemClock()
    notifier = notifier or ConsoleNotifier(console, logger)

    notifier.notify("start", "Fetching Wikipedia article...")
    candidate, stats = asyncio.run(_acquire(cfg, source, notifier, clock))
    log_event(
        logger,
        "Acquisition finished",
        event="acquire_done",
        attempts=stats.attempts,
        errors=stats.errors,
        unsuitable=stats.unsuitable,
        accepted=stats.accepted,
    )

    if candidate is None:
        notifier.notify("not_found", "No suitable Wikipedia article found.")
        return None

    content = render_note(candidate, clock.timestamp())
    try:
        path = write_note(
            vault_dir, cfg.output.note_folder, note_filename(candidate), content
        )
    except OSError as exc:
        logger.error("Note write error: %s", exc)
        notifier.notify(
            "write_failed",
            f"Failed to create note for {candidate.title}: {exc}",
            title=candidate.title,
        )
        raise

    notifier.notify("created", f"Created: {path}", path=str(path))
    if cfg.output.open_note:
        open_note(path)
    return path


async def _acquire(
    cfg: AppConfig,
    source: ArticleSource | None,
    notifier: Notifier,
    clock: Clock,
) -> tuple[ArticleCandidate | None, AcquireStats]:
    if source is not None:
        return await _run_acquirer(cfg, source, notifier, clock)
    async with WikipediaClient(cfg.fetch) as client:
        return await _run_acquirer(cfg, client, notifier, clock)


async def _run_acquirer(
    cfg: AppConfig,
    source: ArticleSource,
    notifier: Notifier,
    clock: Clock,
) -> tuple[ArticleCandidate | None, AcquireStats]:
    acquirer = ArticleAcquirer(
        source,
        cfg.acquisition(),
        notifier,
        clock=clock,
        retry_delay=cfg.acquire.retry_delay_seconds,
    )
    candidate = await acquirer.acquire()
    return candidate, acquirer.stats
