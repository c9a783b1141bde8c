"""
Notepad feature: identifier and clock helpers.
"""

import time
from typing import Callable

from app.features.notepad.models import NotepadDocument

FOLDER_ID_PREFIX = "folder_"

Clock = Callable[[], int]


def now_ms() -> int:
    return int(time.time() * 1000)


class IdGenerator:
    """Millisecond-based ids that never repeat, even within one millisecond."""

    def __init__(self, clock: Clock = now_ms, last: int = 0):
        self._clock = clock
        self._last = last

    def next(self) -> int:
        self._last = max(self._clock(), self._last + 1)
        return self._last

    def folder_id(self) -> str:
        return f"{FOLDER_ID_PREFIX}{self.next()}"

    @classmethod
    def seeded_from(cls, document: NotepadDocument, clock: Clock = now_ms) -> "IdGenerator":
        """Start after the highest id already present in the document."""
        last = max((n.id for n in document.notes), default=0)
        for folder in document.folders:
            suffix = folder.id.removeprefix(FOLDER_ID_PREFIX)
            if folder.id.startswith(FOLDER_ID_PREFIX) and suffix.isdigit():
                last = max(last, int(suffix))
        return cls(clock=clock, last=last)
