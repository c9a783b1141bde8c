"""
FastAPI dependency injection functions.
"""

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from supabase import Client

from app.core.database import get_supabase_client

logger = logging.getLogger(__name__)

# Bearer token scheme for Swagger UI
bearer_scheme = HTTPBearer()


def get_db() -> Client:
    """Dependency: get Supabase client."""
    return get_supabase_client()


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Client = Depends(get_db),
) -> str:
    """Dependency: resolve the Supabase session token to a user id.

    Returns:
        str: The user's UUID as string.

    Raises:
        HTTPException 401: If the token is invalid or expired.
    """
    try:
        response = db.auth.get_user(credentials.credentials)
    except Exception as e:
        logger.warning(f"Session lookup failed: {e}")
        response = None

    user = getattr(response, "user", None)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session is invalid or expired",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return str(user.id)
