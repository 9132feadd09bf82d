"""
Section heading extraction from rendered Wikipedia markup.

Headings are read from the article body (the ``.mw-parser-output`` block,
or the whole document when it is missing) at levels h2 to h4. Edit links
that MediaWiki embeds in headings are removed before the text is read.
"""

from __future__ import annotations

from collections.abc import Collection

from bs4 import BeautifulSoup, Tag

from .types import HeadingRecord

HEADING_TAGS = ["h2", "h3", "h4"]
CONTENT_SELECTOR = ".mw-parser-output"
EDIT_SECTION_SELECTOR = ".mw-editsection"


def extract_headings(markup: str, exclusion_set: Collection[str] = ()) -> list[HeadingRecord]:
    """Extract the ordered, filtered list of section headings.

    A heading is dropped when its lower-cased text is in ``exclusion_set`` or
    when the same (level, text) pair was already kept. Headings whose text is
    empty after stripping are not special-cased.

    Args:
        markup: Rendered article HTML
        exclusion_set: Lower-cased heading texts to leave out

    Returns:
        Headings in document order of their first kept occurrence. Empty or
        malformed markup yields an empty list.
    """
    soup = BeautifulSoup(markup or "", "html.parser")
    root = soup.select_one(CONTENT_SELECTOR) or soup

    headings: list[HeadingRecord] = []
    seen: set[HeadingRecord] = set()
    for element in root.find_all(HEADING_TAGS):
        level = int(element.name[1:])
        for edit_link in element.select(EDIT_SECTION_SELECTOR):
            edit_link.decompose()
        text = _own_text(element).strip()

        if text.lower() in exclusion_set:
            continue
        record = HeadingRecord(level=level, text=text)
        if record in seen:
            continue
        seen.add(record)
        headings.append(record)

    return headings


def _own_text(element: Tag) -> str:
    # html.parser never auto-closes a heading, so a following heading can end up
    # nested inside it; its text belongs to the inner heading only.
    return "".join(
        string for string in element.strings if string.find_parent(HEADING_TAGS) is element
    )
