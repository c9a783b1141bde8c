"""
Image feature: request schema.
"""

from pydantic import BaseModel


class ImageRequest(BaseModel):
    prompt: str | None = None
