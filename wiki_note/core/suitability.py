from __future__ import annotations

from collections.abc import Sized


def is_suitable(headings: Sized, min_headings: int) -> bool:
    """Return True when an article has at least ``min_headings`` headings."""
    return len(headings) >= min_headings
