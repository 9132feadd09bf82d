"""
Command-line interface for wiki-note.

Uses Typer to provide a CLI with options for all major configuration
settings. Supports loading .env files for proxy and logging settings.
"""

from __future__ import annotations

from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console

from .config import coerce_count, load_config, save_config
from .runner import run_once

app = typer.Typer(add_completion=False, help="Save a random Wikipedia article as a Markdown note.")
console = Console()


@app.command()
def run(
    vault: Path = typer.Option(Path("."), "--vault", "-v", file_okay=False),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    folder: str | None = typer.Option(
        None, "--folder", "-f", help="Note folder inside the vault (created if missing)."
    ),
    min_headings: str | None = typer.Option(
        None, "--min-headings", help="Minimum number of section headings."
    ),
    max_retries: str | None = typer.Option(
        None, "--max-retries", help="Maximum number of attempts."
    ),
    exclude: str | None = typer.Option(
        None, "--exclude", help="Comma-separated section titles to leave out."
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Per-request timeout in seconds."
    ),
    open_note: bool | None = typer.Option(
        None, "--open/--no-open", help="Open the note after creating it."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Fetch a random Wikipedia article and save its outline as a note.

    Articles with fewer section headings than the configured minimum are
    skipped until one qualifies or the retry budget is used up.

    Args:
        vault: Directory notes are written under
        config: Optional path to YAML config file
        folder: Note folder relative to the vault
        min_headings: Minimum heading count for a suitable article
        max_retries: Maximum number of attempts
        exclude: Comma-separated disallowed headings
        timeout: Per-request HTTP timeout
        open_note: Whether to open the created note
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Enable/disable file logging
    """
    # Load environment variables (proxies, etc.) from .env if available
    load_dotenv()

    # Load base configuration
    cfg = load_config(str(config) if config else None)

    # Override with CLI options; invalid counts revert to the configured value
    if folder is not None:
        cfg.output.note_folder = folder.strip()
    if min_headings is not None:
        cfg.acquire.min_headings = coerce_count(min_headings, cfg.acquire.min_headings)
    if max_retries is not None:
        cfg.acquire.max_retries = coerce_count(max_retries, cfg.acquire.max_retries)
    if exclude is not None:
        cfg.acquire.disallowed_headings = exclude
    if timeout is not None:
        cfg.fetch.timeout_seconds = timeout if timeout > 0 else None
    if open_note is not None:
        cfg.output.open_note = open_note
    if log_level:
        cfg.logging.level = log_level
    if log_file is not None:
        cfg.logging.file = log_file

    try:
        path = run_once(cfg, vault, console=console)
    except OSError as exc:
        console.print(f"[bold red]Failed to write note:[/] {exc}")
        raise typer.Exit(code=1) from exc

    if path is None:
        raise typer.Exit(code=1)


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(Path("config.yaml")),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file."),
):
    """Write the default configuration to a YAML file."""
    if path.exists() and not force:
        console.print(f"[yellow]{path} already exists; use --force to overwrite.[/]")
        raise typer.Exit(code=1)
    save_config(load_config(None), path)
    console.print(f"Config written: {path}")


if __name__ == "__main__":
    app()
