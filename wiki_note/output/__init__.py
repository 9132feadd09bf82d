"""
Output rendering and note persistence.
"""

from .renderer import note_filename, render_note
from .writer import clean_folder, open_note, safe_filename, write_note

__all__ = [
    "render_note",
    "note_filename",
    "write_note",
    "open_note",
    "clean_folder",
    "safe_filename",
]
