"""
Tests for the notepad AI dock: instruction composition and reply merging.
"""

import pytest

from app.core.attachments import Attachment
from app.core.exceptions import CompletionError
from app.features.notepad.ai import (
    AiDock,
    AiMode,
    AiOutcome,
    MODE_PLACEHOLDERS,
    NO_ACTIVE_NOTE,
    NO_USER_INSTRUCTIONS,
    compose_instruction,
)
from app.features.notepad.models import Note
from app.features.notepad.service import NotepadWorkspace

from conftest import FakeCompletion


def _active_note(workspace, content="A"):
    note = workspace.create_note()
    workspace.update_note(note.id, title="Groceries", content=content)
    return workspace.active_note


class TestSelectMode:
    @pytest.mark.parametrize("mode", [AiMode.IMPROVE, AiMode.SUMMARIZE, AiMode.TASKS, AiMode.REWRITE])
    def test_placeholder_fills_empty_instruction(self, mode):
        dock = AiDock(FakeCompletion())
        dock.select_mode(mode)
        assert dock.mode == mode
        assert dock.instruction == MODE_PLACEHOLDERS[mode]

    def test_typed_text_is_kept(self):
        dock = AiDock(FakeCompletion())
        dock.instruction = "my own words"
        dock.select_mode("summarize")
        assert dock.mode == AiMode.SUMMARIZE
        assert dock.instruction == "my own words"

    def test_free_mode_has_no_placeholder(self):
        dock = AiDock(FakeCompletion())
        dock.select_mode(AiMode.FREE)
        assert dock.instruction == ""


class TestComposeInstruction:
    def test_includes_mode_request_and_note(self):
        note = Note(id=1, title="Groceries", content="milk\neggs", updated=1)
        text = compose_instruction(AiMode.TASKS, "  only dairy  ", note)
        assert "Mode: tasks" in text
        assert "User request: only dairy" in text
        assert "Title: Groceries\nContent:\nmilk\neggs" in text

    def test_placeholders_for_missing_parts(self):
        text = compose_instruction(AiMode.FREE, "   ", None)
        assert NO_USER_INSTRUCTIONS in text
        assert NO_ACTIVE_NOTE in text


class TestMerge:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("mode", [AiMode.IMPROVE, AiMode.REWRITE])
    async def test_replace_modes(self, workspace, mode):
        note = _active_note(workspace)
        dock = AiDock(FakeCompletion(reply="B"), mode)

        result = await dock.submit(workspace)

        assert result.outcome == AiOutcome.REPLACED
        assert workspace.get_note(note.id).content == "B"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mode, heading", [
        (AiMode.SUMMARIZE, "AI Summary:"),
        (AiMode.TASKS, "AI Tasks:"),
        (AiMode.FREE, "AI Output:"),
    ])
    async def test_append_modes(self, workspace, mode, heading):
        note = _active_note(workspace)
        dock = AiDock(FakeCompletion(reply="B"), mode)
        dock.instruction = "go"

        result = await dock.submit(workspace)

        assert result.outcome == AiOutcome.APPENDED
        assert workspace.get_note(note.id).content == f"A\n\n---\n\n{heading}\nB"

    @pytest.mark.asyncio
    async def test_merge_stamps_and_persists(self, workspace, store):
        note = _active_note(workspace)
        before = note.updated
        await AiDock(FakeCompletion(reply="B"), AiMode.IMPROVE).submit(workspace)

        saved = store.load().document.find_note(note.id)
        assert saved.content == "B"
        assert saved.updated > before

    @pytest.mark.asyncio
    async def test_no_active_note_creates_ai_note(self, workspace):
        dock = AiDock(FakeCompletion(reply="  Fresh idea  \n"))
        dock.instruction = "Give me an idea"

        result = await dock.submit(workspace)

        assert result.outcome == AiOutcome.CREATED
        assert len(workspace.notes) == 1
        created = workspace.notes[0]
        assert (created.title, created.content, created.folder_id) == ("AI Note", "Fresh idea", "inbox")
        assert workspace.active_note_id == created.id

    @pytest.mark.asyncio
    async def test_created_note_keeps_reply_exactly(self, workspace):
        dock = AiDock(FakeCompletion(reply="X"))
        dock.instruction = "anything"
        await dock.submit(workspace)
        assert [(n.content, n.folder_id) for n in workspace.notes] == [("X", "inbox")]
        assert workspace.active_note_id == workspace.notes[0].id

    @pytest.mark.asyncio
    async def test_created_note_goes_to_inbox_even_in_other_folder(self, workspace):
        workspace.select_folder("work")
        dock = AiDock(FakeCompletion(reply="text"))
        dock.instruction = "write"
        await dock.submit(workspace)
        assert workspace.notes[0].folder_id == "inbox"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", ["", "   \n"])
    async def test_empty_reply_changes_nothing(self, workspace, reply):
        note = _active_note(workspace)
        before = note.model_copy()

        result = await AiDock(FakeCompletion(reply=reply), AiMode.SUMMARIZE).submit(workspace)

        assert result.outcome == AiOutcome.EMPTY_REPLY
        assert workspace.get_note(note.id) == before
        assert len(workspace.notes) == 1


class TestSubmitGuards:
    @pytest.mark.asyncio
    async def test_nothing_to_send(self, workspace):
        completion = FakeCompletion(reply="B")
        dock = AiDock(completion)
        dock.instruction = "   "

        result = await dock.submit(workspace)

        assert result.outcome == AiOutcome.IGNORED
        assert completion.calls == []
        assert workspace.notes == []

    @pytest.mark.asyncio
    async def test_attachment_alone_is_enough(self, workspace):
        completion = FakeCompletion(reply="a cat")
        dock = AiDock(completion)
        image = Attachment(data=b"\x89PNG", filename="cat.png")
        dock.attach(image)

        result = await dock.submit(workspace)

        assert result.outcome == AiOutcome.CREATED
        assert completion.calls[0][1] is image

    @pytest.mark.asyncio
    async def test_busy_while_loading(self, workspace):
        completion = FakeCompletion(reply="B")
        dock = AiDock(completion)
        dock.instruction = "hi"
        dock.loading = True

        result = await dock.submit(workspace)

        assert result.outcome == AiOutcome.BUSY
        assert completion.calls == []
        assert dock.instruction == "hi"

    @pytest.mark.asyncio
    async def test_state_is_cleared_after_success(self, workspace):
        _active_note(workspace)
        dock = AiDock(FakeCompletion(reply="B"), AiMode.IMPROVE)
        dock.instruction = "tighten"
        dock.attach(Attachment(data=b"x"))

        await dock.submit(workspace)

        assert (dock.instruction, dock.attachment, dock.loading) == ("", None, False)

    @pytest.mark.asyncio
    async def test_failure_is_logged_and_state_cleared(self, workspace, caplog):
        note = _active_note(workspace)
        dock = AiDock(FakeCompletion(error=CompletionError("upstream down")), AiMode.IMPROVE)
        dock.instruction = "tighten"

        result = await dock.submit(workspace)

        assert result.outcome == AiOutcome.FAILED
        assert workspace.get_note(note.id).content == "A"
        assert (dock.instruction, dock.attachment, dock.loading) == ("", None, False)
        assert "upstream down" in caplog.text

    @pytest.mark.asyncio
    async def test_loading_is_set_during_request(self, workspace):
        dock = AiDock(FakeCompletion(reply="B"))
        seen = []
        dock.completion.on_call = lambda: seen.append(dock.loading)
        dock.instruction = "hi"

        await dock.submit(workspace)

        assert seen == [True]


class TestConcurrentEdits:
    @pytest.mark.asyncio
    async def test_note_edited_while_waiting(self, workspace, store, clock):
        note = _active_note(workspace)

        def user_keeps_typing():
            NotepadWorkspace(store, clock=clock).update_note(note.id, content="typed meanwhile")

        dock = AiDock(FakeCompletion(reply="B", on_call=user_keeps_typing), AiMode.IMPROVE)
        result = await dock.submit(workspace)

        assert result.outcome == AiOutcome.CONFLICT
        assert workspace.get_note(note.id).content == "typed meanwhile"
        assert store.load().document.find_note(note.id).content == "typed meanwhile"

    @pytest.mark.asyncio
    async def test_note_deleted_while_waiting(self, workspace, store, clock):
        note = _active_note(workspace)

        def user_deletes():
            NotepadWorkspace(store, clock=clock).delete_note(note.id)

        dock = AiDock(FakeCompletion(reply="B", on_call=user_deletes), AiMode.SUMMARIZE)
        result = await dock.submit(workspace)

        assert result.outcome == AiOutcome.NOTE_MISSING
        assert workspace.notes == []
        assert store.load().document.notes == []
