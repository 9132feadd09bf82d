"""
Note persistence: folder creation, file writing and opening the note.

Failures here happen after an article has been accepted and are left for
the caller to report.
"""

from __future__ import annotations

import re
from pathlib import Path

import typer

_FOLDER_EDGE_SLASH = re.compile(r"^/|/$")
_PATH_SEPARATORS = re.compile(r"[/\\]")


def clean_folder(note_folder: str) -> str:
    """Strip one leading and one trailing slash from a configured folder.

    Examples:
        >>> clean_folder("/Wikipedia/Articles/")
        'Wikipedia/Articles'
    """
    return _FOLDER_EDGE_SLASH.sub("", note_folder.strip())


def safe_filename(filename: str) -> str:
    """Replace path separators so an article title cannot create subfolders."""
    return _PATH_SEPARATORS.sub("-", filename)


def write_note(vault_dir: Path, note_folder: str, filename: str, content: str) -> Path:
    """Write a note into ``vault_dir/note_folder``, creating the folder if needed.

    Args:
        vault_dir: Root directory notes are written under
        note_folder: Folder relative to the vault, or empty for the vault root
        filename: Suggested note file name
        content: Rendered note body

    Returns:
        Path of the created note

    Raises:
        FileExistsError: If a note with the same name already exists
        PermissionError: If the folder resolves outside ``vault_dir``
        OSError: If the folder or file cannot be created
    """
    folder = vault_dir
    cleaned = clean_folder(note_folder)
    if cleaned:
        folder = vault_dir / cleaned
    vault_root = vault_dir.resolve()
    resolved = folder.resolve()
    if resolved != vault_root and vault_root not in resolved.parents:
        raise PermissionError(f"Note folder {note_folder!r} is outside the vault {vault_dir}")
    resolved.mkdir(parents=True, exist_ok=True)

    path = resolved / safe_filename(filename)
    # "x" mode refuses to clobber an existing note
    with path.open("x", encoding="utf-8") as handle:
        handle.write(content)
    return path


def open_note(path: Path) -> int:
    """Open a note with the system's default application."""
    return typer.launch(str(path))
