"""
Notepad feature: Schemas for request/response models.
"""

from pydantic import BaseModel, ConfigDict, Field

from app.features.notepad.models import SystemFolder


class NoteCreate(BaseModel):
    """Request to create a note. `folder` is the currently selected folder or filter."""
    folder: str = SystemFolder.ALL.value


class NoteUpdate(BaseModel):
    """Partial update. Unset fields are left alone; `updated` is always stamped."""
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    content: str | None = None
    pinned: bool | None = None
    favorite: bool | None = None
    done: bool | None = None
    folder_id: str | None = Field(default=None, alias="folderId")


class NoteMove(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    folder_id: str = Field(alias="folderId")


class FolderCreate(BaseModel):
    """Folder name as typed; a leading emoji becomes the folder's icon."""
    name: str
