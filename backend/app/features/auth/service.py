"""
Auth feature: email/password sign-in and sign-up through Supabase Auth.
"""

import logging

from supabase import Client

from app.core.exceptions import AuthError
from app.features.auth.schemas import CredentialsRequest, SessionResponse, SignUpResponse, UserResponse

logger = logging.getLogger(__name__)

WORKSPACE_PATH = "/chat"


def _user(user) -> UserResponse:
    return UserResponse(id=str(user.id), email=getattr(user, "email", None))


def _session(session, user) -> SessionResponse:
    return SessionResponse(
        access_token=session.access_token,
        refresh_token=getattr(session, "refresh_token", None),
        user=_user(user),
        redirect_to=WORKSPACE_PATH,
    )


class AuthService:
    """Delegates credential checks and session issuing to Supabase."""

    def __init__(self, db: Client):
        self.db = db

    def sign_in(self, data: CredentialsRequest) -> SessionResponse:
        """Sign in and return the session.

        Raises:
            AuthError: If credentials are rejected.
        """
        try:
            response = self.db.auth.sign_in_with_password(
                {"email": data.email, "password": data.password}
            )
        except Exception as e:
            logger.error(f"Sign-in failed for {data.email}: {e}")
            raise AuthError(str(e) or "Unexpected error signing in.") from e

        if response.session is None or response.user is None:
            raise AuthError("Invalid login credentials")
        return _session(response.session, response.user)

    def sign_up(self, data: CredentialsRequest) -> SignUpResponse:
        """Create an account. A session is only returned if email confirmation is off."""
        try:
            response = self.db.auth.sign_up({"email": data.email, "password": data.password})
        except Exception as e:
            logger.error(f"Sign-up failed for {data.email}: {e}")
            raise AuthError(str(e) or "Unexpected error creating account.") from e

        user = _user(response.user) if response.user else None
        session = _session(response.session, response.user) if response.session and response.user else None
        return SignUpResponse(
            message="Account created! Check your email if verification is required.",
            user=user,
            session=session,
        )

    def get_user(self, access_token: str) -> UserResponse:
        try:
            response = self.db.auth.get_user(access_token)
        except Exception as e:
            raise AuthError("Session is invalid or expired", detail=str(e)) from e
        if response is None or response.user is None:
            raise AuthError("Session is invalid or expired")
        return _user(response.user)
