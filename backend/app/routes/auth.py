"""
DevConnector Backend - Authentication Routes
============================================

POST /api/auth: log in with e-mail and password.
GET  /api/auth: the user the presented token belongs to.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.database import get_db_session
from app.dependencies import get_app_settings, get_current_user
from app.models.user import User
from app.schemas.common import ErrorResponse
from app.schemas.user import LoginRequest, TokenResponse, UserResponse
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.get(
    "",
    response_model=UserResponse,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Get the authenticated user",
)
async def current_user(user: User = Depends(get_current_user)) -> UserResponse:
    return auth_service.describe(user)


@router.post(
    "",
    response_model=TokenResponse,
    responses={400: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Authenticate user and get token",
)
async def login(
    body: LoginRequest,
    settings: Settings = Depends(get_app_settings),
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    return await auth_service.login(db, settings, email=body.email, password=body.password)
