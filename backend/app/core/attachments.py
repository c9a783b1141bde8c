"""
Uploaded file helpers shared by chat, research and the notepad AI dock.
"""

import base64
from dataclasses import dataclass

from starlette.datastructures import UploadFile

DEFAULT_MIME_TYPE = "image/png"


@dataclass(frozen=True)
class Attachment:
    """Raw bytes of one uploaded file plus the metadata the collaborators need."""

    data: bytes
    filename: str = "upload"
    content_type: str = DEFAULT_MIME_TYPE

    @property
    def size(self) -> int:
        return len(self.data)

    def data_url(self) -> str:
        """Encode as a `data:<mime>;base64,...` URL for vision models."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.content_type or DEFAULT_MIME_TYPE};base64,{encoded}"


async def read_upload(file: UploadFile | None) -> Attachment | None:
    """Read an UploadFile into an Attachment. Missing or empty uploads yield None."""
    if file is None:
        return None
    contents = await file.read()
    if not contents:
        return None
    return Attachment(
        data=contents,
        filename=file.filename or "upload",
        content_type=file.content_type or DEFAULT_MIME_TYPE,
    )
