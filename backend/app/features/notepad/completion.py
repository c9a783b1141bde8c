"""
Notepad feature: completion collaborators used by the AI dock.

A client takes role-tagged messages plus an optional attachment and returns
the reply text (possibly empty). Failures raise CompletionError.
"""

import json
import logging
from typing import Protocol

import httpx

from app.config import get_settings
from app.core.attachments import Attachment
from app.core.exceptions import CompletionError
from app.features.chat.prompts import VISION_INSTRUCTION
from app.features.chat.service import ChatService, last_user_content

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    async def complete(self, messages: list[dict], attachment: Attachment | None = None) -> str: ...


class LLMCompletionClient:
    """Calls the chat model in-process through ChatService."""

    def __init__(self, chat_service: ChatService | None = None):
        self._chat_service = chat_service

    @property
    def chat_service(self) -> ChatService:
        # built lazily so constructing the client never needs LLM credentials
        if self._chat_service is None:
            self._chat_service = ChatService()
        return self._chat_service

    async def complete(self, messages: list[dict], attachment: Attachment | None = None) -> str:
        try:
            if attachment is None:
                return await self.chat_service.reply(messages)
            instruction = VISION_INSTRUCTION.format(request=last_user_content(messages))
            return await self.chat_service.analyze(messages, attachment, instruction)
        except Exception as e:
            raise CompletionError(str(e)) from e


class HttpCompletionClient:
    """Posts to a `/api/chat`-shaped endpoint.

    JSON `{messages}` without a file; multipart with `messages` (JSON text)
    and `file` when one is attached. The endpoint answers `{reply}` or an
    error field.
    """

    def __init__(self, url: str, timeout: float = 60.0, client: httpx.AsyncClient | None = None):
        self.url = url
        self.timeout = timeout
        self._client = client

    async def _post(self, client: httpx.AsyncClient, messages: list[dict], attachment: Attachment | None):
        if attachment is None:
            return await client.post(self.url, json={"messages": messages})
        return await client.post(
            self.url,
            data={"messages": json.dumps(messages, ensure_ascii=False)},
            files={"file": (attachment.filename, attachment.data, attachment.content_type)},
        )

    async def complete(self, messages: list[dict], attachment: Attachment | None = None) -> str:
        try:
            if self._client is not None:
                response = await self._post(self._client, messages, attachment)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._post(client, messages, attachment)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise CompletionError(str(e)) from e

        if not isinstance(payload, dict) or "reply" not in payload:
            error = payload.get("error") if isinstance(payload, dict) else None
            raise CompletionError(error or "response has no reply field")
        reply = payload["reply"]
        if reply is not None and not isinstance(reply, str):
            raise CompletionError(f"reply is not text: {type(reply).__name__}")
        return reply or ""


def get_completion_client() -> CompletionClient:
    """Dependency: completion client chosen by NOTEPAD_COMPLETION."""
    settings = get_settings()
    if settings.NOTEPAD_COMPLETION == "http":
        return HttpCompletionClient(settings.NOTEPAD_COMPLETION_URL, settings.NOTEPAD_COMPLETION_TIMEOUT)
    return LLMCompletionClient()
