"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from (and saving to) YAML files with defaults. Configuration sections:
- AcquireConfig: Article suitability and retry settings
- FetchConfig: Wikipedia API endpoints and HTTP settings
- OutputConfig: Note folder and editor settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math
from pathlib import Path
from typing import Any

import yaml

from .core.types import AcquisitionConfig, parse_exclusion_set


DEFAULT_DISALLOWED_HEADINGS = (
    "See also, References, Further reading, External links, Notes, Contents, "
    "Source, Gallery, Additional sources, Other websites, Citations, Works cited, "
    "Footnotes, Links, Sources, Related, Bibliography"
)


@dataclass
class AcquireConfig:
    """Configuration for the article acquisition loop.

    Attributes:
        min_headings: Minimum number of section headings an article must have
        max_retries: Maximum number of attempts before giving up
        disallowed_headings: Comma-separated section titles to leave out (case-insensitive)
        retry_delay_seconds: Pause after a failed fetch before the next attempt
    """

    min_headings: int = 3
    max_retries: int = 15
    disallowed_headings: str = DEFAULT_DISALLOWED_HEADINGS
    retry_delay_seconds: float = 0.5


@dataclass
class FetchConfig:
    """Configuration for Wikipedia HTTP requests.

    Attributes:
        random_title_url: REST endpoint returning a random page title
        parse_api_url: MediaWiki action API endpoint used to render a page
        article_base_url: Prefix for canonical article links
        timeout_seconds: Per-request timeout, or None to rely on the transport
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
    """

    random_title_url: str = "https://en.wikipedia.org/api/rest_v1/page/random/title"
    parse_api_url: str = "https://en.wikipedia.org/w/api.php"
    article_base_url: str = "https://en.wikipedia.org/wiki/"
    timeout_seconds: float | None = 20.0
    trust_env: bool = True
    user_agent: str = "wiki-note/0.1.0 (python-httpx)"


@dataclass
class OutputConfig:
    """Configuration for note output.

    Attributes:
        note_folder: Folder (relative to the vault) where notes are created; empty for the vault root
        open_note: Whether to open the created note with the default application
    """

    note_folder: str = ""
    open_note: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Path of the log file
    """

    level: str = "WARNING"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "wiki-note.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    acquire: AcquireConfig = field(default_factory=AcquireConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def acquisition(self) -> AcquisitionConfig:
        """Snapshot of the settings the acquisition loop reads for one run."""
        return AcquisitionConfig(
            min_headings=self.acquire.min_headings,
            max_retries=self.acquire.max_retries,
            exclusion_set=parse_exclusion_set(self.acquire.disallowed_headings),
        )


DEFAULT_CONFIG = AppConfig()


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return _fromdict(_asdict(DEFAULT_CONFIG))

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(DEFAULT_CONFIG, raw)


def save_config(cfg: AppConfig, path: str | Path) -> Path:
    """Write configuration to a YAML file, creating parent folders."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as f:
        yaml.safe_dump(_asdict(cfg), f, sort_keys=False, allow_unicode=True)
    return target


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update({k: v for k, v in value.items() if k in data[key]})
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "acquire": {
            "min_headings": cfg.acquire.min_headings,
            "max_retries": cfg.acquire.max_retries,
            "disallowed_headings": cfg.acquire.disallowed_headings,
            "retry_delay_seconds": cfg.acquire.retry_delay_seconds,
        },
        "fetch": {
            "random_title_url": cfg.fetch.random_title_url,
            "parse_api_url": cfg.fetch.parse_api_url,
            "article_base_url": cfg.fetch.article_base_url,
            "timeout_seconds": cfg.fetch.timeout_seconds,
            "trust_env": cfg.fetch.trust_env,
            "user_agent": cfg.fetch.user_agent,
        },
        "output": {
            "note_folder": cfg.output.note_folder,
            "open_note": cfg.output.open_note,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    acquire_data = dict(data["acquire"])
    # Mirror the settings panel: anything that is not a usable count reverts to the default
    acquire_data["min_headings"] = coerce_count(
        acquire_data.get("min_headings"), DEFAULT_CONFIG.acquire.min_headings
    )
    acquire_data["max_retries"] = coerce_count(
        acquire_data.get("max_retries"), DEFAULT_CONFIG.acquire.max_retries
    )
    acquire_data["disallowed_headings"] = str(acquire_data.get("disallowed_headings") or "")
    acquire_data["retry_delay_seconds"] = coerce_seconds(
        acquire_data.get("retry_delay_seconds"), DEFAULT_CONFIG.acquire.retry_delay_seconds
    )

    fetch_data = dict(data["fetch"])
    # null or 0 disables the per-request timeout
    fetch_data["timeout_seconds"] = coerce_seconds(
        fetch_data.get("timeout_seconds"), DEFAULT_CONFIG.fetch.timeout_seconds, allow_none=True
    )

    output_data = dict(data["output"])
    output_data["note_folder"] = str(output_data.get("note_folder") or "").strip()

    return AppConfig(
        acquire=AcquireConfig(**acquire_data),
        fetch=FetchConfig(**fetch_data),
        output=OutputConfig(**output_data),
        logging=LoggingConfig(**data["logging"]),
    )


def coerce_count(value: Any, default: int) -> int:
    """Parse a non-negative integer setting, falling back to ``default``.

    Examples:
        >>> coerce_count("5", 3)
        5
        >>> coerce_count("lots", 3)
        3
    """
    if isinstance(value, bool):
        return default
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    if parsed < 0:
        return default
    return parsed


def coerce_seconds(value: Any, default: float | None, allow_none: bool = False) -> float | None:
    """Parse a non-negative duration in seconds, falling back to ``default``.

    With ``allow_none`` a missing value or zero means "no limit" and yields None.

    Examples:
        >>> coerce_seconds("1.5", 0.5)
        1.5
        >>> coerce_seconds(None, 0.5)
        0.5
        >>> coerce_seconds(0, 20.0, allow_none=True) is None
        True
    """
    if value is None:
        return None if allow_none else default
    if isinstance(value, bool):
        return default
    try:
        parsed = float(str(value).strip())
    except (TypeError, ValueError):
        return default
    if not math.isfinite(parsed) or parsed < 0:
        return default
    if allow_none and parsed == 0:
        return None
    return parsed
