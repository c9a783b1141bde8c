"""
HTTP tests for the notepad routes, with storage and completion overridden.
"""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.features.notepad.completion import HttpCompletionClient, get_completion_client
from app.features.notepad.dependencies import get_document_store
from app.features.notepad.store import DocumentStore, MemoryBackend
from app.main import create_app

from conftest import LEGACY_KEY, STORAGE_KEY, FakeCompletion


@pytest.fixture
def completion():
    return FakeCompletion(reply="B")


@pytest.fixture
def client(store, completion):
    app = create_app()
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_completion_client] = lambda: completion
    return TestClient(app)


def _create(client, folder="all", **fields) -> dict:
    note = client.post("/api/notepad/notes", json={"folder": folder}).json()["data"]
    if fields:
        note = client.patch(f"/api/notepad/notes/{note['id']}", json=fields).json()["data"]
    return note


class TestDocument:
    def test_empty_document(self, client):
        response = client.get("/api/notepad/")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "empty"
        assert body["data"]["notes"] == []
        assert len(body["data"]["folders"]) == 5

    def test_migrated_document(self, completion):
        legacy = [{"id": 1, "title": "old", "content": "", "pinned": False,
                   "favorite": False, "done": False, "updated": 1}]
        backend = MemoryBackend({LEGACY_KEY: json.dumps(legacy)})
        app = create_app()
        app.dependency_overrides[get_document_store] = lambda: DocumentStore(backend, STORAGE_KEY, LEGACY_KEY)
        body = TestClient(app).get("/api/notepad/").json()
        assert body["status"] == "migrated"
        assert body["data"]["notes"][0]["folderId"] == "inbox"


class TestNotes:
    def test_create_without_body(self, client):
        response = client.post("/api/notepad/notes")
        assert response.status_code == 200
        note = response.json()["data"]
        assert note["title"] == "Untitled Note"
        assert note["folderId"] == "inbox"

    def test_create_in_selected_folder(self, client):
        assert _create(client, folder="ideas")["folderId"] == "ideas"
        assert _create(client, folder="pinned")["folderId"] == "inbox"
        assert _create(client, folder="bogus")["folderId"] == "inbox"

    def test_update(self, client):
        note = _create(client)
        response = client.patch(
            f"/api/notepad/notes/{note['id']}",
            json={"title": "Plan", "pinned": True},
        )
        updated = response.json()["data"]
        assert (updated["title"], updated["pinned"], updated["content"]) == ("Plan", True, "")
        assert updated["updated"] > note["updated"]

    def test_update_unknown(self, client):
        response = client.patch("/api/notepad/notes/123", json={"title": "x"})
        assert response.status_code == 404
        assert response.json()["detail"]["type"] == "NoteNotFoundError"

    def test_delete(self, client, store):
        note = _create(client)
        response = client.delete(f"/api/notepad/notes/{note['id']}")
        assert response.json() == {"message": "Note deleted"}
        assert store.load().document.notes == []
        assert client.delete(f"/api/notepad/notes/{note['id']}").status_code == 404

    def test_move(self, client):
        note = _create(client)
        response = client.post(f"/api/notepad/notes/{note['id']}/move", json={"folderId": "work"})
        assert response.json()["data"]["folderId"] == "work"

    def test_move_to_filter_is_rejected(self, client):
        note = _create(client)
        response = client.post(f"/api/notepad/notes/{note['id']}/move", json={"folderId": "done"})
        assert response.status_code == 404
        assert response.json()["detail"]["type"] == "FolderNotFoundError"

    def test_list_filters_and_labels(self, client):
        fav = _create(client, title="fruit salad", favorite=True)
        _create(client, title="taxes")

        body = client.get("/api/notepad/notes", params={"folder": "favorites"}).json()
        assert [n["id"] for n in body["data"]] == [fav["id"]]
        assert body["label"] == "Favorites"

        body = client.get("/api/notepad/notes", params={"search": "FRUIT"}).json()
        assert [n["id"] for n in body["data"]] == [fav["id"]]
        assert body["label"] == "All Notes"

    def test_list_sort_title(self, client):
        _create(client, title="b")
        _create(client, title="a")
        body = client.get("/api/notepad/notes", params={"sort": "title"}).json()
        assert [n["title"] for n in body["data"]] == ["a", "b"]

    def test_list_rejects_unknown_sort(self, client):
        assert client.get("/api/notepad/notes", params={"sort": "random"}).status_code == 422


class TestFolders:
    def test_create_folder(self, client):
        response = client.post("/api/notepad/folders", json={"name": "📁 Lab"})
        folder = response.json()["data"]
        assert (folder["emoji"], folder["name"], folder["builtIn"]) == ("📁", "Lab", False)
        assert folder["id"].startswith("folder_")

    def test_blank_name(self, client):
        response = client.post("/api/notepad/folders", json={"name": "   "})
        assert response.status_code == 400
        assert response.json()["detail"] == "Folder name is required"


class TestAi:
    def test_improve_replaces_content(self, client, completion):
        note = _create(client, content="A")
        response = client.post(
            "/api/notepad/ai",
            data={"mode": "improve", "instruction": "tighten", "note_id": str(note["id"])},
        )
        body = response.json()["data"]
        assert body["outcome"] == "replaced"
        assert body["note"]["content"] == "B"
        assert "User request: tighten" in completion.calls[0][0][0]["content"]

    def test_summarize_appends(self, client):
        note = _create(client, content="A")
        body = client.post(
            "/api/notepad/ai",
            data={"mode": "summarize", "note_id": str(note["id"])},
        ).json()["data"]
        assert body["outcome"] == "appended"
        assert body["note"]["content"] == "A\n\n---\n\nAI Summary:\nB"

    def test_empty_mode_instruction_uses_placeholder(self, client, completion):
        note = _create(client, content="A")
        client.post("/api/notepad/ai", data={"mode": "tasks", "note_id": str(note["id"])})
        assert "Extract clear action items with checkboxes." in completion.calls[0][0][0]["content"]

    def test_without_note_creates_ai_note(self, client):
        body = client.post("/api/notepad/ai", data={"instruction": "idea please"}).json()["data"]
        assert body["outcome"] == "created"
        assert body["note"]["title"] == "AI Note"
        assert body["active_note_id"] == body["note"]["id"]

    def test_nothing_to_send(self, client, completion):
        body = client.post("/api/notepad/ai", data={"instruction": " "}).json()["data"]
        assert body == {"outcome": "ignored", "note": None, "active_note_id": None}
        assert completion.calls == []

    def test_attachment_is_forwarded(self, client, completion):
        body = client.post(
            "/api/notepad/ai",
            files={"file": ("cat.png", b"\x89PNG", "image/png")},
        ).json()["data"]
        assert body["outcome"] == "created"
        attachment = completion.calls[0][1]
        assert (attachment.filename, attachment.data) == ("cat.png", b"\x89PNG")

    def test_unknown_note(self, client):
        response = client.post("/api/notepad/ai", data={"instruction": "x", "note_id": "404"})
        assert response.status_code == 404

    def test_collaborator_failure_is_not_an_http_error(self, client, completion):
        from app.core.exceptions import CompletionError

        completion.error = CompletionError("boom")
        note = _create(client, content="A")
        response = client.post("/api/notepad/ai", data={"mode": "improve", "note_id": str(note["id"])})
        assert response.status_code == 200
        assert response.json()["data"]["outcome"] == "failed"


    def test_non_text_reply_from_chat_endpoint_fails_quietly(self, store):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"reply": 42}))
        remote = HttpCompletionClient("http://chat.test/api/chat", client=httpx.AsyncClient(transport=transport))
        app = create_app()
        app.dependency_overrides[get_document_store] = lambda: store
        app.dependency_overrides[get_completion_client] = lambda: remote
        client = TestClient(app)

        note = _create(client, content="A")
        response = client.post("/api/notepad/ai", data={"mode": "summarize", "note_id": str(note["id"])})

        assert response.status_code == 200
        assert response.json()["data"]["outcome"] == "failed"
        assert store.load().document.find_note(note["id"]).content == "A"


class TestAuthRequired:
    def test_missing_token(self):
        response = TestClient(create_app()).get("/api/notepad/")
        assert response.status_code in (401, 403)
