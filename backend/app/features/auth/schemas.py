"""
Auth feature: Pydantic schemas for request/response models.
"""

from pydantic import BaseModel, EmailStr


# ── Requests ─────────────────────────────────────────────
class CredentialsRequest(BaseModel):
    email: EmailStr
    password: str


# ── Responses ────────────────────────────────────────────
class UserResponse(BaseModel):
    id: str
    email: str | None = None


class SessionResponse(BaseModel):
    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    user: UserResponse
    redirect_to: str = "/chat"


class SignUpResponse(BaseModel):
    message: str
    user: UserResponse | None = None
    session: SessionResponse | None = None
