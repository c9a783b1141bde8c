"""
Notepad feature: storage dependencies.
"""

from functools import lru_cache

from fastapi import Depends

from app.config import get_settings
from app.core.database import get_supabase_client
from app.core.dependencies import get_current_user_id
from app.features.notepad.store import (
    DocumentStore,
    FileBackend,
    KeyValueBackend,
    MemoryBackend,
    SupabaseBackend,
)


@lru_cache
def _memory_backend() -> MemoryBackend:
    return MemoryBackend()


def get_notepad_backend() -> KeyValueBackend:
    """Dependency: key/value backend chosen by NOTEPAD_STORE."""
    settings = get_settings()

    match settings.NOTEPAD_STORE:
        case "file":
            return FileBackend(settings.NOTEPAD_DATA_DIR)
        case "memory":
            return _memory_backend()
        case "supabase":
            return SupabaseBackend(get_supabase_client(), settings.NOTEPAD_TABLE)
        case _:
            raise ValueError(
                f"Unknown notepad store: '{settings.NOTEPAD_STORE}'. "
                f"Supported: file, memory, supabase"
            )


def get_document_store(
    user_id: str = Depends(get_current_user_id),
    backend: KeyValueBackend = Depends(get_notepad_backend),
) -> DocumentStore:
    """Dependency: the current user's notepad document."""
    settings = get_settings()
    return DocumentStore(
        backend,
        key=f"{settings.NOTEPAD_STORAGE_KEY}:{user_id}",
        legacy_key=f"{settings.NOTEPAD_LEGACY_KEY}:{user_id}",
    )
