"""
Auth feature: API routes.
"""

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials
from supabase import Client

from app.core.dependencies import bearer_scheme, get_db
from app.core.exceptions import AuthError, app_error_to_http
from app.features.auth.schemas import CredentialsRequest, SessionResponse, SignUpResponse, UserResponse
from app.features.auth.service import AuthService

router = APIRouter()


@router.post("/signin", response_model=SessionResponse)
async def sign_in(data: CredentialsRequest, db: Client = Depends(get_db)):
    """Sign in with email + password. The client redirects to `redirect_to`."""
    service = AuthService(db)
    try:
        return service.sign_in(data)
    except AuthError as e:
        raise app_error_to_http(e, status.HTTP_401_UNAUTHORIZED)


@router.post("/signup", response_model=SignUpResponse)
async def sign_up(data: CredentialsRequest, db: Client = Depends(get_db)):
    """Create an account."""
    service = AuthService(db)
    try:
        return service.sign_up(data)
    except AuthError as e:
        raise app_error_to_http(e, status.HTTP_400_BAD_REQUEST)


@router.get("/session", response_model=UserResponse)
async def get_session(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Client = Depends(get_db),
):
    """Current user for a session token; 401 means the client should go to /login."""
    service = AuthService(db)
    try:
        return service.get_user(credentials.credentials)
    except AuthError as e:
        raise app_error_to_http(e, status.HTTP_401_UNAUTHORIZED)
