"""Helpers for the files in the notes directory.

Notes are opaque files; nothing here looks inside them except :func:`first_line`.
"""

from datetime import date, datetime, timezone
import os
import os.path
from typing import List, Optional
from newt.errors import NoSuchNoteError, NotesAccessError


def _created(path: str) -> Optional[datetime]:
    try:
        stat = os.stat(path)
    except OSError:
        return None
    try:
        return datetime.fromtimestamp(stat.st_birthtime, tz=timezone.utc)
    except AttributeError:
        return datetime.fromtimestamp(stat.st_ctime, tz=timezone.utc)


def list_notes(notes_dir: str) -> List[str]:
    """Returns the names of the files in the notes directory, oldest first.

    Files whose creation time cannot be determined are listed after the rest. Ties are broken by name.
    Raises :exc:`newt.errors.NotesAccessError` if the directory cannot be read.
    """
    try:
        entries = os.listdir(notes_dir)
    except OSError as e:
        raise NotesAccessError(notes_dir, e) from e
    names = [name for name in entries if os.path.isfile(os.path.join(notes_dir, name))]
    created = {name: _created(os.path.join(notes_dir, name)) for name in names}
    return sorted(names, key=lambda n: (created[n] is None, created[n].timestamp() if created[n] else 0, n))


def new_file_name(notes_dir: str, today: date = None) -> str:
    """Returns a file name like ``2020-01-31_0.md`` that does not yet exist in the notes directory."""
    base = (today or date.today()).strftime('%Y-%m-%d')
    existing = set(os.listdir(notes_dir)) if os.path.isdir(notes_dir) else set()
    idx = 0
    while f'{base}_{idx}.md' in existing:
        idx += 1
    return f'{base}_{idx}.md'


def first_line(path: str, max_len: int) -> Optional[str]:
    """Returns the first line of the file that contains a non-whitespace character, or None if there isn't one.

    Lines longer than max_len characters are cut short and end with ``...``; max_len must be at least 4.
    Raises :exc:`newt.errors.NotesAccessError` if the file cannot be read.
    """
    if max_len < 4:
        raise ValueError(f'max_len must be at least 4, not {max_len}')
    try:
        with open(path, 'r', errors='replace') as file:
            for line in file:
                line = line.rstrip('\r\n')
                if line.strip():
                    if len(line) > max_len:
                        return line[:max_len - 3] + '...'
                    return line
    except OSError as e:
        raise NotesAccessError(path, e) from e
    return None


def note_path(notes_dir: str, index: int) -> str:
    """Returns the path of the note at the given 1-based position in :func:`list_notes`."""
    names = list_notes(notes_dir)
    if not 1 <= index <= len(names):
        raise NoSuchNoteError(index, len(names))
    return os.path.join(notes_dir, names[index - 1])
