"""
Notepad feature: API routes for notes, folders and the AI dock.

Each request opens the user's workspace from the store, applies one
operation and the workspace writes the whole document back.
"""

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status

from app.core.attachments import read_upload
from app.core.exceptions import FolderNotFoundError, NoteNotFoundError, app_error_to_http
from app.features.notepad.ai import AiDock, AiMode
from app.features.notepad.completion import CompletionClient, get_completion_client
from app.features.notepad.dependencies import get_document_store
from app.features.notepad.models import SortOrder, SystemFolder
from app.features.notepad.schemas import FolderCreate, NoteCreate, NoteMove, NoteUpdate
from app.features.notepad.service import NotepadWorkspace
from app.features.notepad.store import DocumentStore

router = APIRouter()


def _open(store: DocumentStore) -> NotepadWorkspace:
    return NotepadWorkspace(store)


@router.get("/")
async def get_document(store: DocumentStore = Depends(get_document_store)):
    """Whole document plus how it was loaded (loaded / migrated / empty / recovered)."""
    workspace = _open(store)
    return {
        "data": workspace.document.dump(),
        "status": workspace.load_result.status.value,
    }


@router.get("/notes")
async def list_notes(
    folder: str = SystemFolder.ALL.value,
    search: str = "",
    sort: SortOrder = Query(SortOrder.UPDATED_DESC),
    store: DocumentStore = Depends(get_document_store),
):
    """Visible notes for a folder/filter, search text and sort order."""
    workspace = _open(store)
    workspace.select_folder(folder)
    notes = workspace.visible_notes(search, sort)
    return {
        "data": [n.model_dump(by_alias=True) for n in notes],
        "label": workspace.folder_label(),
    }


@router.post("/notes")
async def create_note(
    data: NoteCreate | None = None,
    store: DocumentStore = Depends(get_document_store),
):
    """Create an empty note in the selected folder (inbox for filters)."""
    workspace = _open(store)
    workspace.select_folder((data or NoteCreate()).folder)
    note = workspace.create_note()
    return {"data": note.model_dump(by_alias=True)}


@router.patch("/notes/{note_id}")
async def update_note(
    note_id: int,
    data: NoteUpdate,
    store: DocumentStore = Depends(get_document_store),
):
    workspace = _open(store)
    try:
        note = workspace.update_note(note_id, **data.model_dump(exclude_unset=True, exclude_none=True))
    except NoteNotFoundError as e:
        raise app_error_to_http(e, status.HTTP_404_NOT_FOUND)
    return {"data": note.model_dump(by_alias=True)}


@router.delete("/notes/{note_id}")
async def delete_note(note_id: int, store: DocumentStore = Depends(get_document_store)):
    workspace = _open(store)
    try:
        workspace.delete_note(note_id)
    except NoteNotFoundError as e:
        raise app_error_to_http(e, status.HTTP_404_NOT_FOUND)
    return {"message": "Note deleted"}


@router.post("/notes/{note_id}/move")
async def move_note(
    note_id: int,
    data: NoteMove,
    store: DocumentStore = Depends(get_document_store),
):
    workspace = _open(store)
    try:
        note = workspace.move_note_to_folder(note_id, data.folder_id)
    except (NoteNotFoundError, FolderNotFoundError) as e:
        raise app_error_to_http(e, status.HTTP_404_NOT_FOUND)
    return {"data": note.model_dump(by_alias=True)}


@router.post("/folders")
async def create_folder(data: FolderCreate, store: DocumentStore = Depends(get_document_store)):
    workspace = _open(store)
    folder = workspace.create_folder(data.name)
    if folder is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Folder name is required")
    return {"data": folder.model_dump(by_alias=True)}


@router.post("/ai")
async def run_ai(
    mode: AiMode = Form(AiMode.FREE),
    instruction: str = Form(""),
    note_id: int | None = Form(None),
    file: UploadFile | None = File(None),
    store: DocumentStore = Depends(get_document_store),
    completion: CompletionClient = Depends(get_completion_client),
):
    """Run the AI dock against a note (or none, to create an "AI Note").

    Collaborator failures are not reported as errors: the outcome is
    `failed` and nothing changes.
    """
    workspace = _open(store)
    if note_id is not None:
        try:
            workspace.select_note(note_id)
        except NoteNotFoundError as e:
            raise app_error_to_http(e, status.HTTP_404_NOT_FOUND)

    dock = AiDock(completion)
    dock.instruction = instruction
    dock.select_mode(mode)
    dock.attach(await read_upload(file))

    result = await dock.submit(workspace)
    return {
        "data": {
            "outcome": result.outcome.value,
            "note": result.note.model_dump(by_alias=True) if result.note else None,
            "active_note_id": workspace.active_note_id,
        }
    }
