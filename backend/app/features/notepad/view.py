"""
Notepad feature: visible note list (filter + sort).

Recomputed from scratch on every call; there is no index.
"""

from typing import Iterable

from app.features.notepad.models import (
    FLAG_SELECTORS,
    SYSTEM_FOLDER_LABELS,
    Folder,
    Note,
    SortOrder,
    SystemFolder,
)


def matches_selector(note: Note, selector: str) -> bool:
    if selector == SystemFolder.ALL.value:
        return True
    flag = FLAG_SELECTORS.get(selector)
    if flag is not None:
        return getattr(note, flag)
    return note.display_folder_id == selector


def matches_search(note: Note, search: str) -> bool:
    needle = search.strip().casefold()
    if not needle:
        return True
    return needle in f"{note.title} {note.content}".casefold()


def _secondary_key(sort: SortOrder):
    if sort == SortOrder.UPDATED_ASC:
        return lambda n: n.updated
    if sort == SortOrder.TITLE:
        return lambda n: n.title.casefold()
    return lambda n: -n.updated


def visible_notes(
    notes: Iterable[Note],
    selector: str = SystemFolder.ALL.value,
    search: str = "",
    sort: SortOrder = SortOrder.UPDATED_DESC,
) -> list[Note]:
    """Notes shown for a folder selector and search text. Pinned notes always come first."""
    selected = [n for n in notes if matches_selector(n, selector) and matches_search(n, search)]
    secondary = _secondary_key(SortOrder(sort))
    return sorted(selected, key=lambda n: (not n.pinned, secondary(n)))


def folder_label(selector: str, folders: Iterable[Folder]) -> str:
    for system, label in SYSTEM_FOLDER_LABELS.items():
        if selector == system.value:
            return label
    folder = next((f for f in folders if f.id == selector), None)
    return folder.name if folder else "Notes"
