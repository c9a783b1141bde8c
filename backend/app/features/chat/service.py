"""
Chat feature: completion calls against the configured chat model.
"""

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from app.core.attachments import Attachment
from app.core.llm_provider import create_llm
from app.features.chat.prompts import CHAT_SYSTEM_PROMPT, VISION_SYSTEM_PROMPT

_ROLE_TO_MESSAGE = {
    "user": HumanMessage,
    "assistant": AIMessage,
    "system": SystemMessage,
}


def to_langchain_messages(messages: list[dict]) -> list[BaseMessage]:
    """Convert role-tagged dicts (`{"role", "content"}`) into LangChain messages."""
    converted = []
    for m in messages:
        message_cls = _ROLE_TO_MESSAGE.get(m.get("role", "user"), HumanMessage)
        converted.append(message_cls(content=m.get("content") or ""))
    return converted


def build_vision_content(text: str, attachment: Attachment) -> list[dict]:
    """Multimodal content blocks: the text followed by the image as a data URL."""
    return [
        {"type": "text", "text": text},
        {"type": "image_url", "image_url": {"url": attachment.data_url()}},
    ]


def extract_text(content) -> str:
    """Flatten a model reply. Some providers return a list of typed parts."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for item in content:
            if isinstance(item, dict) and item.get("type", "text") == "text" and "text" in item:
                parts.append(item["text"])
            elif isinstance(item, str):
                parts.append(item)
        return "".join(parts)
    return str(content or "")


def last_user_content(messages: list[dict]) -> str:
    if not messages:
        return ""
    content = messages[-1].get("content") or ""
    return content if isinstance(content, str) else ""


class ChatService:
    """Text and vision completions. Returns the trimmed reply, possibly empty."""

    def __init__(self, llm: BaseChatModel | None = None):
        self.llm = llm or create_llm()

    async def reply(self, messages: list[dict], system_prompt: str = CHAT_SYSTEM_PROMPT) -> str:
        history = [SystemMessage(content=system_prompt), *to_langchain_messages(messages)]
        response = await self.llm.ainvoke(history)
        return extract_text(response.content).strip()

    async def analyze(
        self,
        messages: list[dict],
        attachment: Attachment,
        instruction: str,
        system_prompt: str = VISION_SYSTEM_PROMPT,
    ) -> str:
        """Send the conversation plus one image turn to the vision model."""
        history = [
            SystemMessage(content=system_prompt),
            *to_langchain_messages(messages),
            HumanMessage(content=build_vision_content(instruction, attachment)),
        ]
        response = await self.llm.ainvoke(history)
        return extract_text(response.content).strip()


def get_chat_service() -> ChatService:
    """Dependency: chat service bound to the configured LLM."""
    return ChatService()
