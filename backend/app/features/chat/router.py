"""
Chat feature: text / vision completion routes.

Both routes accept either a JSON body `{messages}` or a multipart form with a
`messages` JSON field and an optional `file`. They always answer `{reply}`;
failures are turned into a ⚠️ reply rather than an error body.
"""

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from app.config import get_settings
from app.core.attachments import Attachment, read_upload
from app.features.chat import prompts
from app.features.chat.service import ChatService, get_chat_service, last_user_content

logger = logging.getLogger(__name__)

router = APIRouter()


def reply_json(reply: str, status_code: int = 200) -> JSONResponse:
    return JSONResponse({"reply": reply}, status_code=status_code)


def parse_messages(raw) -> list[dict]:
    """Decode the `messages` field. Raises ValueError on anything but a list of objects."""
    if raw is None or raw == "":
        return []
    messages = json.loads(raw) if isinstance(raw, str) else raw
    if not isinstance(messages, list) or not all(isinstance(m, dict) for m in messages):
        raise ValueError("messages must be a list of {role, content} objects")
    return messages


async def _read_form(request: Request) -> tuple[list[dict], Attachment | None]:
    form = await request.form()
    messages = parse_messages(form.get("messages"))
    upload = form.get("file")
    attachment = await read_upload(upload) if isinstance(upload, UploadFile) else None
    return messages, attachment


@router.post("/chat")
async def chat(request: Request, service: ChatService = Depends(get_chat_service)):
    """Chat with the assistant; attach an image to get a vision answer."""
    content_type = request.headers.get("content-type", "")
    try:
        if "application/json" in content_type:
            body = await request.json()
            messages = parse_messages(body.get("messages") if isinstance(body, dict) else None)
            attachment = None
        elif "multipart/form-data" in content_type:
            messages, attachment = await _read_form(request)
        else:
            return reply_json(prompts.UNSUPPORTED_TYPE, 400)
    except ValueError as e:
        logger.warning(f"Chat route rejected payload: {e}")
        return reply_json(prompts.INVALID_MESSAGES, 400)

    try:
        if attachment is None:
            if not messages:
                return reply_json(prompts.NO_MESSAGES, 400)
            logger.debug("No file uploaded, text-only path")
            reply = await service.reply(messages)
            return reply_json(reply or prompts.NO_RESPONSE)

        instruction = prompts.VISION_INSTRUCTION.format(request=last_user_content(messages))
        reply = await service.analyze(messages, attachment, instruction)
        return reply_json(reply or prompts.NO_ANALYSIS)
    except Exception as e:
        logger.error(f"Chat route error: {e}", exc_info=True)
        return reply_json(f"⚠️ {e}" if str(e) else prompts.SERVER_ERROR, 500)


@router.post("/research")
async def research(request: Request, service: ChatService = Depends(get_chat_service)):
    """Image research: multipart requests must carry a file under the upload limit."""
    settings = get_settings()
    content_type = request.headers.get("content-type", "")
    try:
        if "multipart/form-data" in content_type:
            messages, attachment = await _read_form(request)
            if attachment is None:
                return reply_json(prompts.NO_FILE, 400)
            if attachment.size > settings.max_upload_bytes:
                return reply_json(prompts.FILE_TOO_LARGE.format(limit=settings.MAX_UPLOAD_MB), 400)
        elif "application/json" in content_type:
            body = await request.json()
            messages = parse_messages(body.get("messages") if isinstance(body, dict) else None)
            if not messages:
                return reply_json(prompts.NO_MESSAGES, 400)
            attachment = None
        else:
            return reply_json(prompts.UNSUPPORTED_TYPE, 400)
    except ValueError as e:
        logger.warning(f"Research route rejected payload: {e}")
        return reply_json(prompts.INVALID_MESSAGES, 400)

    try:
        if attachment is None:
            reply = await service.reply(messages, system_prompt=prompts.RESEARCH_SYSTEM_PROMPT)
            return reply_json(reply or prompts.NO_RESPONSE)

        reply = await service.analyze(
            messages,
            attachment,
            prompts.RESEARCH_VISION_INSTRUCTION,
            system_prompt=prompts.RESEARCH_VISION_SYSTEM_PROMPT,
        )
        return reply_json(reply or prompts.NO_ANALYSIS)
    except Exception as e:
        logger.error(f"Research route error: {e}", exc_info=True)
        return reply_json(prompts.RESEARCH_SERVER_ERROR, 500)
