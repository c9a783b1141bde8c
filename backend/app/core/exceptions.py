"""
Custom exception classes for unified error handling.
"""

from fastapi import HTTPException


class AppBaseError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class NoteNotFoundError(AppBaseError):
    """Raised when a note id does not exist in the document."""
    def __init__(self, note_id: int):
        self.note_id = note_id
        super().__init__(
            message=f"Note {note_id} not found",
            detail="It may have been deleted in another tab.",
        )


class FolderNotFoundError(AppBaseError):
    """Raised when a note is moved to a folder that does not exist."""
    def __init__(self, folder_id: str):
        self.folder_id = folder_id
        super().__init__(
            message=f"Folder '{folder_id}' not found",
            detail="Only real folders can hold notes; all/favorites/pinned/done are filters.",
        )


class CompletionError(AppBaseError):
    """Raised when the text/vision completion collaborator fails or answers garbage."""
    def __init__(self, original_error: str):
        super().__init__(
            message="Completion request failed",
            detail=original_error,
        )


class ImageGenerationError(AppBaseError):
    """Raised when the image model returns no image."""
    def __init__(self, message: str = "Image generation failed."):
        super().__init__(message=message)


class AuthError(AppBaseError):
    """Raised when the auth provider rejects credentials or a session token."""
    def __init__(self, message: str = "Authentication failed", detail: str | None = None):
        super().__init__(message=message, detail=detail)


# ── Utility: convert to HTTPException ────────────────────

def app_error_to_http(error: AppBaseError, status_code: int = 400) -> HTTPException:
    """Convert an AppBaseError to an HTTPException with consistent JSON body."""
    return HTTPException(
        status_code=status_code,
        detail={
            "error": error.message,
            "detail": error.detail,
            "type": type(error).__name__,
        },
    )
