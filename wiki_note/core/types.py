"""
Core data types for wiki-note.

This module defines the fundamental data structures used throughout the pipeline:
- HeadingRecord: One section heading extracted from an article
- ArticleCandidate: An accepted article ready to be rendered
- AcquisitionConfig: Read-only settings snapshot for one acquisition run
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class HeadingRecord:
    """A section heading extracted from rendered article markup.

    Two records are equal when both level and text match exactly.

    Attributes:
        level: Heading level (2, 3 or 4)
        text: Heading text with edit links removed and whitespace stripped
    """
    level: int
    text: str


@dataclass(frozen=True)
class ArticleCandidate:
    """An article that passed the suitability check.

    Attributes:
        title: The article title as returned by the random-title endpoint
        link: Canonical URL of the article
        headings: Extracted headings in document order
        acquired_at: Date (YYYY-MM-DD) on which the article was accepted
    """
    title: str
    link: str
    headings: tuple[HeadingRecord, ...]
    acquired_at: str


@dataclass(frozen=True)
class AcquisitionConfig:
    """Settings read by the acquisition loop for the duration of one run.

    Attributes:
        min_headings: Minimum heading count for an article to be accepted
        max_retries: Maximum number of attempts
        exclusion_set: Lower-cased heading texts to drop during extraction
    """
    min_headings: int = 3
    max_retries: int = 15
    exclusion_set: frozenset[str] = field(default_factory=frozenset)


def parse_exclusion_set(raw: str) -> frozenset[str]:
    """Build the exclusion set from a comma-separated list of heading titles.

    Examples:
        >>> sorted(parse_exclusion_set(" See also, References ,,"))
        ['references', 'see also']
    """
    return frozenset(
        part.strip().lower() for part in raw.split(",") if part.strip()
    )
