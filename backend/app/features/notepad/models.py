"""
Notepad feature: persisted data model (notes, folders, document).

Field aliases keep the serialized shape identical to the browser's
localStorage blob (`folderId`, `builtIn`), so documents written by the
web client and by this backend are interchangeable.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

INBOX_ID = "inbox"
DEFAULT_NOTE_TITLE = "Untitled Note"
DEFAULT_FOLDER_EMOJI = "📁"


class Note(BaseModel):
    """A single note. `updated` is epoch milliseconds."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str = DEFAULT_NOTE_TITLE
    content: str = ""
    pinned: bool = False
    favorite: bool = False
    done: bool = False
    updated: int = 0
    folder_id: str | None = Field(default=None, alias="folderId")

    @property
    def display_folder_id(self) -> str:
        """The real folder this note is shown under."""
        return self.folder_id or INBOX_ID


class Folder(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    emoji: str = DEFAULT_FOLDER_EMOJI
    built_in: bool = Field(default=False, alias="builtIn")


class NotepadDocument(BaseModel):
    """The full persisted unit: every note and every folder."""

    notes: list[Note] = Field(default_factory=list)
    folders: list[Folder] = Field(default_factory=list)

    @field_validator("notes", "folders", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value

    def find_note(self, note_id: int) -> Note | None:
        return next((n for n in self.notes if n.id == note_id), None)

    def find_folder(self, folder_id: str) -> Folder | None:
        return next((f for f in self.folders if f.id == folder_id), None)

    def dump(self) -> dict:
        return self.model_dump(by_alias=True)


class SystemFolder(str, Enum):
    """Virtual selectors. They filter notes, they are not Folder entities."""

    ALL = "all"
    FAVORITES = "favorites"
    PINNED = "pinned"
    DONE = "done"


SYSTEM_FOLDER_LABELS = {
    SystemFolder.ALL: "All Notes",
    SystemFolder.FAVORITES: "Favorites",
    SystemFolder.PINNED: "Pinned",
    SystemFolder.DONE: "Done",
}

# selector -> Note flag it requires
FLAG_SELECTORS = {
    SystemFolder.FAVORITES.value: "favorite",
    SystemFolder.PINNED.value: "pinned",
    SystemFolder.DONE.value: "done",
}


class SortOrder(str, Enum):
    UPDATED_DESC = "updated-desc"
    UPDATED_ASC = "updated-asc"
    TITLE = "title"


def is_system_selector(selector: str) -> bool:
    return selector in {s.value for s in SystemFolder}
