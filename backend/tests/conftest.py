"""Shared fixtures: fixed clock, in-memory store, fake completion collaborator."""

import pytest

from app.features.notepad.service import NotepadWorkspace
from app.features.notepad.store import DocumentStore, MemoryBackend

STORAGE_KEY = "vr_notepad_v2"
LEGACY_KEY = "vr_notepad"


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: int = 1_000):
        self.value = start

    def __call__(self) -> int:
        return self.value

    def advance(self, ms: int = 1) -> None:
        self.value += ms


class FakeCompletion:
    """Completion collaborator returning a canned reply (or raising)."""

    def __init__(self, reply: str = "", error: Exception | None = None, on_call=None):
        self.reply = reply
        self.error = error
        self.on_call = on_call
        self.calls = []

    async def complete(self, messages, attachment=None):
        self.calls.append((messages, attachment))
        if self.on_call is not None:
            self.on_call()
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return DocumentStore(backend, key=STORAGE_KEY, legacy_key=LEGACY_KEY)


@pytest.fixture
def workspace(store, clock):
    return NotepadWorkspace(store, clock=clock)
