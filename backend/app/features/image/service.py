"""
Image feature: text-to-image generation with the Gemini image model.
Returns the first generated image as a base64 data URL.
"""

import base64
import logging

from app.config import get_settings
from app.core.exceptions import ImageGenerationError

logger = logging.getLogger(__name__)


class ImageService:
    """Thin wrapper around google-genai image generation."""

    def __init__(self, client=None, model: str | None = None):
        settings = get_settings()
        self.model = model or settings.IMAGE_MODEL
        self._client = client

    @property
    def client(self):
        if self._client is None:
            from google import genai

            settings = get_settings()
            self._client = genai.Client(api_key=settings.IMAGE_API_KEY or settings.LLM_API_KEY)
        return self._client

    def generate(self, prompt: str) -> str:
        """Generate one image for `prompt`.

        Raises:
            ImageGenerationError: If the model answers without an image part.
        """
        from google.genai import types

        response = self.client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_modalities=["TEXT", "IMAGE"],
            ),
        )

        candidates = response.candidates or []
        parts = candidates[0].content.parts if candidates and candidates[0].content else []
        for part in parts or []:
            if part.inline_data and part.inline_data.data:
                mime_type = part.inline_data.mime_type or "image/png"
                encoded = base64.b64encode(part.inline_data.data).decode("ascii")
                return f"data:{mime_type};base64,{encoded}"

        logger.error(f"No image returned by {self.model} for prompt: {prompt[:80]}")
        raise ImageGenerationError()


def get_image_service() -> ImageService:
    """Dependency: image service bound to IMAGE_MODEL."""
    return ImageService()
