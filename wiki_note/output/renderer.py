"""
Markdown note rendering.

The note layout is fixed: YAML front matter with the ``wikipedia`` tag, a
timestamp line, a link line, the title heading and then one Markdown
heading per extracted section heading. All values are written verbatim.
"""

from __future__ import annotations

from ..core.types import ArticleCandidate

FRONT_MATTER = "---\ntags: wikipedia\n---\n"
SECTIONS_HEADER = "## Sections:"
NO_SECTIONS_PLACEHOLDER = "No significant sections found for this article."


def render_note(candidate: ArticleCandidate, timestamp: str) -> str:
    """Render the Markdown body of a note.

    Args:
        candidate: The accepted article
        timestamp: Creation time, formatted ``YYYY-MM-DD HH:mm:ss``

    Returns:
        The note text, ending with a newline. With no headings a placeholder line
        replaces the sections block.
    """
    lines = [
        FRONT_MATTER,
        timestamp,
        "**Related Topics**:",
        f"**Link**: {candidate.link}",
        f"# {candidate.title} #wikipedia",
        "",
    ]
    if candidate.headings:
        lines.append(SECTIONS_HEADER)
        for heading in candidate.headings:
            lines.append(f"{'#' * heading.level} {heading.text}")
            lines.append("")
    else:
        lines.append(NO_SECTIONS_PLACEHOLDER)
        lines.append("")
    lines.append("")
    return "\n".join(lines) + "\n"


def note_filename(candidate: ArticleCandidate) -> str:
    """Return the suggested file name, e.g. ``2024-01-01 Wikipedia Note - Foo.md``."""
    return f"{candidate.acquired_at} Wikipedia Note - {candidate.title}.md"
