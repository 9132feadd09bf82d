"""
wiki-note - save a random Wikipedia article as a Markdown note.

This package fetches random English Wikipedia articles until one has
enough section headings, then writes an Obsidian-style note listing
those headings.

Main entry point is the CLI via `wiki-note run` command.

Example:
    $ wiki-note run --vault ~/notes --folder Wikipedia/Articles
"""

__all__ = [
    "__version__",
    "ArticleAcquirer",
    "ArticleCandidate",
    "HeadingRecord",
    "extract_headings",
    "is_suitable",
    "render_note",
]
__version__ = "0.1.0"

from .acquire import ArticleAcquirer
from .core import ArticleCandidate, HeadingRecord, extract_headings, is_suitable
from .output.renderer import render_note
