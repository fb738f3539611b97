"""
DevConnector Backend - Auth Gate
================================

What:  FastAPI dependencies resolving the caller of a private route.
How:   Reads the token from `Authorization: Bearer <token>` (or the legacy
       `x-auth-token` header), decodes it with the app's settings, and loads
       the user in the request's session.

Failure modes (all → 401 AuthenticationError):
    - no token header
    - token fails signature/expiry checks
    - token names a user that no longer exists
"""

import logging
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.database import get_db_session
from app.exceptions import AuthenticationError
from app.models.user import User
from app.security import decode_access_token
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


def extract_token(authorization: Optional[str], x_auth_token: Optional[str]) -> Optional[str]:
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    if x_auth_token:
        return x_auth_token.strip() or None
    return None


async def get_current_user(
    authorization: Optional[str] = Header(default=None),
    x_auth_token: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_app_settings),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """Resolve the bearer token to a `User`, or reject the request."""
    token = extract_token(authorization, x_auth_token)
    if token is None:
        raise AuthenticationError()

    user_id = decode_access_token(token, settings)
    user = await auth_service.find_user(db, user_id)
    if user is None:
        logger.warning("Token for unknown user %s rejected", user_id)
        raise AuthenticationError(message="Token is not valid")
    return user
