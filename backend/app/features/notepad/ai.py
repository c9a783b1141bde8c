"""
Notepad feature: AI dock (instruction composition + reply merge).

Flow:
  1. The dock holds a mode, free-text instruction and an optional attachment.
  2. submit() composes one instruction block from the mode, the user request
     and the active note, and sends it to the completion collaborator.
  3. The reply is merged back by mode: replace, append under a heading,
     or create a new note when nothing was active.

The active note's `updated` stamp is captured before the request. When the
reply arrives the workspace is re-read from the store; if the note is gone
or was edited in the meantime the merge is skipped.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from app.core.attachments import Attachment
from app.core.exceptions import CompletionError
from app.features.notepad.completion import CompletionClient
from app.features.notepad.models import INBOX_ID, Note
from app.features.notepad.service import NotepadWorkspace

logger = logging.getLogger(__name__)

AI_NOTE_TITLE = "AI Note"
NO_USER_INSTRUCTIONS = "(no extra instructions from user)."
NO_ACTIVE_NOTE = "(no active note selected)"
SEPARATOR = "---"


class AiMode(str, Enum):
    FREE = "free"
    IMPROVE = "improve"
    SUMMARIZE = "summarize"
    TASKS = "tasks"
    REWRITE = "rewrite"


MODE_PLACEHOLDERS = {
    AiMode.IMPROVE: "Polish this note, keep my voice but make it tighter.",
    AiMode.SUMMARIZE: "Summarize this note into 3–5 bullet points.",
    AiMode.TASKS: "Extract clear action items with checkboxes.",
    AiMode.REWRITE: "Rewrite this in a more professional, concise tone.",
}

MODE_INSTRUCTIONS = {
    AiMode.FREE: "Follow the user's request, using the note as context when it helps.",
    AiMode.IMPROVE: "Improve clarity, flow and grammar while keeping the author's voice and meaning.",
    AiMode.SUMMARIZE: "Summarize the note into 3-5 concise bullet points.",
    AiMode.TASKS: "Extract clear, actionable tasks as a checklist using '- [ ]' items.",
    AiMode.REWRITE: "Rewrite the note in a more professional, concise tone.",
}

REPLACE_MODES = {AiMode.IMPROVE, AiMode.REWRITE}

APPEND_HEADINGS = {
    AiMode.SUMMARIZE: "AI Summary:",
    AiMode.TASKS: "AI Tasks:",
    AiMode.FREE: "AI Output:",
}

GUIDELINES = (
    "Guidelines:\n"
    "- Return only the note content, with no meta commentary.\n"
    "- Preserve the existing structure and lists where possible.\n"
    "- Do not add AI disclaimers."
)


class AiOutcome(str, Enum):
    IGNORED = "ignored"            # nothing to send
    BUSY = "busy"                  # a request is already in flight
    FAILED = "failed"              # collaborator error, logged only
    EMPTY_REPLY = "empty_reply"    # no text came back
    NOTE_MISSING = "note_missing"  # target note deleted while waiting
    CONFLICT = "conflict"          # target note edited while waiting
    REPLACED = "replaced"
    APPENDED = "appended"
    CREATED = "created"


@dataclass
class AiResult:
    outcome: AiOutcome
    note: Note | None = None
    reply: str | None = None


def compose_instruction(mode: AiMode, request: str, note: Note | None) -> str:
    """Build the single message sent to the completion collaborator."""
    request = request.strip() or NO_USER_INSTRUCTIONS
    if note is None:
        note_block = NO_ACTIVE_NOTE
    else:
        note_block = f"Title: {note.title}\nContent:\n{note.content}"

    return (
        "You are the writing assistant of a notepad app.\n"
        f"Mode: {mode.value}\n\n"
        f"{GUIDELINES}\n\n"
        f"Task: {MODE_INSTRUCTIONS[mode]}\n\n"
        f"User request: {request}\n\n"
        f"Active note:\n{note_block}"
    )


def merged_content(mode: AiMode, current: str, reply: str) -> str:
    """New content of an existing note after merging `reply` for `mode`."""
    if mode in REPLACE_MODES:
        return reply
    return f"{current}\n\n{SEPARATOR}\n\n{APPEND_HEADINGS[mode]}\n{reply}"


def apply_reply(
    workspace: NotepadWorkspace,
    mode: AiMode,
    reply: str,
    note_id: int | None,
    expected_updated: int | None = None,
) -> AiResult:
    """Merge a completion reply into the workspace.

    `expected_updated` is the note's `updated` stamp when the request was
    sent; a different stamp now means the user kept editing, so the reply
    is dropped instead of overwriting their text.
    """
    if not reply or not reply.strip():
        return AiResult(AiOutcome.EMPTY_REPLY, reply=reply)

    if note_id is None:
        note = workspace.insert_note(title=AI_NOTE_TITLE, content=reply.strip(), folder_id=INBOX_ID)
        return AiResult(AiOutcome.CREATED, note=note, reply=reply)

    current = workspace.document.find_note(note_id)
    if current is None:
        logger.warning(f"AI reply for note {note_id} dropped: note no longer exists")
        return AiResult(AiOutcome.NOTE_MISSING, reply=reply)
    if expected_updated is not None and current.updated != expected_updated:
        logger.warning(f"AI reply for note {note_id} dropped: note changed while waiting")
        return AiResult(AiOutcome.CONFLICT, note=current, reply=reply)

    note = workspace.update_note(note_id, content=merged_content(mode, current.content, reply))
    outcome = AiOutcome.REPLACED if mode in REPLACE_MODES else AiOutcome.APPENDED
    return AiResult(outcome, note=note, reply=reply)


class AiDock:
    """AI dock state: mode, instruction text, attachment, loading flag."""

    def __init__(self, completion: CompletionClient, mode: AiMode = AiMode.FREE):
        self.completion = completion
        self.mode = mode
        self.instruction = ""
        self.attachment: Attachment | None = None
        self.loading = False

    def select_mode(self, mode: AiMode | str) -> None:
        """Switch mode; prefill the mode's placeholder only if nothing is typed."""
        self.mode = AiMode(mode)
        placeholder = MODE_PLACEHOLDERS.get(self.mode)
        if placeholder and not self.instruction:
            self.instruction = placeholder

    def attach(self, attachment: Attachment | None) -> None:
        self.attachment = attachment

    def can_submit(self, workspace: NotepadWorkspace) -> bool:
        return bool(workspace.active_note or self.instruction.strip() or self.attachment)

    def _clear(self) -> None:
        self.instruction = ""
        self.attachment = None
        self.loading = False

    async def submit(self, workspace: NotepadWorkspace) -> AiResult:
        if self.loading:
            return AiResult(AiOutcome.BUSY)
        if not self.can_submit(workspace):
            return AiResult(AiOutcome.IGNORED)

        mode = self.mode
        note = workspace.active_note
        note_id = note.id if note else None
        expected_updated = note.updated if note else None
        messages = [{"role": "user", "content": compose_instruction(mode, self.instruction, note)}]
        attachment = self.attachment

        self.loading = True
        try:
            reply = await self.completion.complete(messages, attachment)
        except CompletionError as e:
            logger.error(f"Notepad AI request failed ({mode.value}): {e.detail}")
            return AiResult(AiOutcome.FAILED)
        finally:
            self._clear()

        # the store may have been written while we were waiting
        workspace.refresh()
        return apply_reply(workspace, mode, reply, note_id, expected_updated)
