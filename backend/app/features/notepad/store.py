"""
Notepad feature: document persistence and legacy migration.

The document is stored as one JSON blob under a versioned key. An older
client wrote a bare list of notes under a legacy key; that list is migrated
on load (but never deleted or rewritten). Once the versioned key has been
written the legacy key is not read again.

Backends only know how to get/set strings by key, so the same migration
logic runs against memory, local files, or a Supabase table.
"""

import json
import logging
import os
import re
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter, ValidationError
from supabase import Client

from app.features.notepad.folders import default_folders
from app.features.notepad.models import INBOX_ID, Note, NotepadDocument

logger = logging.getLogger(__name__)

_legacy_notes = TypeAdapter(list[Note])


# ── Backends ─────────────────────────────────────────────

class KeyValueBackend(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryBackend:
    """In-process dict. Used by tests and NOTEPAD_STORE=memory."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class FileBackend:
    """One JSON file per key inside a directory."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        safe = re.sub(r"[^\w.-]", "_", key)
        return self.directory / f"{safe}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        # write-then-rename so readers never see a half-written document
        fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise


class SupabaseBackend:
    """One row per key in a Supabase table with `key` (unique) and `value` columns."""

    def __init__(self, db: Client, table: str):
        self.db = db
        self.table = table

    def get(self, key: str) -> str | None:
        result = self.db.table(self.table).select("value").eq("key", key).execute()
        if not result.data:
            return None
        return result.data[0]["value"]

    def set(self, key: str, value: str) -> None:
        self.db.table(self.table).upsert({"key": key, "value": value}, on_conflict="key").execute()


# ── Document store ───────────────────────────────────────

class LoadStatus(str, Enum):
    LOADED = "loaded"        # versioned document read
    MIGRATED = "migrated"    # built from the legacy note list
    EMPTY = "empty"          # nothing stored yet
    RECOVERED = "recovered"  # stored data was unreadable, started empty


@dataclass
class LoadResult:
    status: LoadStatus
    document: NotepadDocument
    error: str | None = None


def empty_document() -> NotepadDocument:
    return NotepadDocument(notes=[], folders=default_folders())


class DocumentStore:
    """Reads and writes the whole notepad document under one versioned key."""

    def __init__(self, backend: KeyValueBackend, key: str, legacy_key: str | None = None):
        self.backend = backend
        self.key = key
        self.legacy_key = legacy_key

    def load(self) -> LoadResult:
        try:
            raw = self.backend.get(self.key)
            if raw:
                document = NotepadDocument.model_validate(json.loads(raw))
                if not document.folders:
                    document.folders = default_folders()
                return LoadResult(LoadStatus.LOADED, document)

            legacy_raw = self.backend.get(self.legacy_key) if self.legacy_key else None
            if legacy_raw:
                notes = _legacy_notes.validate_python(json.loads(legacy_raw))
                for note in notes:
                    note.folder_id = note.folder_id or INBOX_ID
                logger.info(f"Migrated {len(notes)} legacy notes from '{self.legacy_key}'")
                return LoadResult(
                    LoadStatus.MIGRATED,
                    NotepadDocument(notes=notes, folders=default_folders()),
                )
        except (ValueError, TypeError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning(f"Notepad document '{self.key}' unreadable, starting empty: {e}")
            return LoadResult(LoadStatus.RECOVERED, empty_document(), error=str(e))

        return LoadResult(LoadStatus.EMPTY, empty_document())

    def save(self, document: NotepadDocument) -> None:
        self.backend.set(self.key, json.dumps(document.dump(), ensure_ascii=False))
