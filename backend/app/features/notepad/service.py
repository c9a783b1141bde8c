"""
Notepad feature: workspace state and mutations.

Every mutation rewrites the whole document through the store immediately;
there is no batching or debounce.
"""

import logging

from app.core.exceptions import FolderNotFoundError, NoteNotFoundError
from app.features.notepad.folders import parse_folder_name
from app.features.notepad.ids import Clock, IdGenerator, now_ms
from app.features.notepad.models import (
    DEFAULT_NOTE_TITLE,
    INBOX_ID,
    Folder,
    Note,
    NotepadDocument,
    SortOrder,
    SystemFolder,
    is_system_selector,
)
from app.features.notepad.store import DocumentStore, LoadResult
from app.features.notepad.view import folder_label, visible_notes

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {"title", "content", "pinned", "favorite", "done", "folder_id"}


class NotepadWorkspace:
    """Notes, folders and the current selection for one user."""

    def __init__(self, store: DocumentStore, clock: Clock = now_ms):
        self.store = store
        self._clock = clock
        self.active_folder: str = SystemFolder.ALL.value
        self.active_note_id: int | None = None
        self.load_result: LoadResult = store.load()
        self.document: NotepadDocument = self.load_result.document
        self._ids = IdGenerator.seeded_from(self.document, clock)

    # ── Reads ────────────────────────────────────────────

    @property
    def notes(self) -> list[Note]:
        return self.document.notes

    @property
    def folders(self) -> list[Folder]:
        return self.document.folders

    @property
    def active_note(self) -> Note | None:
        if self.active_note_id is None:
            return None
        return self.document.find_note(self.active_note_id)

    def get_note(self, note_id: int) -> Note:
        note = self.document.find_note(note_id)
        if note is None:
            raise NoteNotFoundError(note_id)
        return note

    def visible_notes(self, search: str = "", sort: SortOrder = SortOrder.UPDATED_DESC) -> list[Note]:
        return visible_notes(self.notes, self.active_folder, search, sort)

    def folder_label(self) -> str:
        return folder_label(self.active_folder, self.folders)

    # ── Selection ────────────────────────────────────────

    def select_folder(self, selector: str) -> None:
        self.active_folder = selector

    def select_note(self, note_id: int | None) -> None:
        if note_id is not None:
            self.get_note(note_id)
        self.active_note_id = note_id

    def refresh(self) -> LoadResult:
        """Re-read the document from the store, keeping the current selection."""
        self.load_result = self.store.load()
        self.document = self.load_result.document
        self._ids = IdGenerator.seeded_from(self.document, self._clock)
        return self.load_result

    # ── Mutations ────────────────────────────────────────

    def _save(self) -> None:
        self.store.save(self.document)

    def _target_folder(self) -> str:
        """Folder new notes go to: the active one if it is real, else inbox."""
        if is_system_selector(self.active_folder) or self.document.find_folder(self.active_folder) is None:
            return INBOX_ID
        return self.active_folder

    def insert_note(self, title: str = DEFAULT_NOTE_TITLE, content: str = "", folder_id: str | None = None) -> Note:
        """Create a note at the head of the list and make it active."""
        note = Note(
            id=self._ids.next(),
            title=title,
            content=content,
            updated=self._clock(),
            folder_id=folder_id or self._target_folder(),
        )
        self.document.notes.insert(0, note)
        self.active_note_id = note.id
        self._save()
        return note

    def create_note(self) -> Note:
        return self.insert_note()

    def update_note(self, note_id: int, **fields) -> Note:
        """Merge `fields` into the note and stamp `updated`, even when nothing changed."""
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update note fields: {sorted(unknown)}")
        note = self.get_note(note_id)
        for name, value in fields.items():
            setattr(note, name, value)
        note.updated = max(self._clock(), note.updated + 1)
        self._save()
        return note

    def delete_note(self, note_id: int) -> None:
        note = self.get_note(note_id)
        self.document.notes.remove(note)
        if self.active_note_id == note_id:
            self.active_note_id = None
        self._save()

    def move_note_to_folder(self, note_id: int, folder_id: str) -> Note:
        if self.document.find_folder(folder_id) is None:
            raise FolderNotFoundError(folder_id)
        return self.update_note(note_id, folder_id=folder_id)

    def create_folder(self, raw_name: str | None) -> Folder | None:
        """Add a user folder from typed input and make it the active selector.

        Returns None when the input is blank (the prompt was dismissed).
        """
        if not raw_name or not raw_name.strip():
            return None
        emoji, name = parse_folder_name(raw_name)
        folder = Folder(id=self._ids.folder_id(), name=name, emoji=emoji)
        self.document.folders.append(folder)
        self.active_folder = folder.id
        self._save()
        logger.info(f"Created folder {folder.id} ({folder.emoji} {folder.name})")
        return folder
