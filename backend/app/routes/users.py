"""
DevConnector Backend - Registration Route
=========================================

POST /api/users: create an account and receive a token.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.database import get_db_session
from app.dependencies import get_app_settings
from app.schemas.common import ErrorResponse
from app.schemas.user import RegisterRequest, TokenResponse
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post(
    "",
    response_model=TokenResponse,
    responses={400: {"description": "Invalid input or e-mail taken", "model": ErrorResponse}},
    summary="Register user",
)
async def register(
    body: RegisterRequest,
    settings: Settings = Depends(get_app_settings),
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    return await auth_service.register(
        db, settings, name=body.name, email=body.email, password=body.password
    )
