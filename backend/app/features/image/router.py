"""
Image feature: API route for prompt-to-image generation.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.core.exceptions import ImageGenerationError
from app.features.image.schemas import ImageRequest
from app.features.image.service import ImageService, get_image_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/image")
def generate_image(data: ImageRequest, service: ImageService = Depends(get_image_service)):
    """Generate an image from a prompt. Answers `{image}` or `{error}`."""
    settings = get_settings()
    prompt = (data.prompt or "").strip()
    if len(prompt) < settings.IMAGE_MIN_PROMPT_LENGTH:
        return JSONResponse({"error": "Prompt too short."}, status_code=400)

    try:
        image = service.generate(prompt)
    except ImageGenerationError as e:
        return JSONResponse({"error": e.message}, status_code=500)
    except Exception as e:
        logger.error(f"Image API error: {e}", exc_info=True)
        return JSONResponse({"error": str(e) or "Server error."}, status_code=500)

    return {"image": image}
