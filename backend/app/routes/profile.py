"""
DevConnector Backend - Profile Route Handlers
=============================================

What:  Profile reads, upsert, account deletion and the experience/education
       sub-entity endpoints.
Who:   Dashboard, profile editor and developer listing pages of the frontend.

Ownership:
    Private routes only ever operate on the caller's own profile; the
    mutation engine re-checks `profile.user == caller` before every change.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.profile import (
    EducationRequest,
    ExperienceRequest,
    ProfileRequest,
    ProfileResponse,
)
from app.services.profile_service import profile_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profile", tags=["Profile"])

_NO_PROFILE = {400: {"description": "No profile for this user", "model": ErrorResponse}}
_ENTRY_ERRORS = {
    400: {"description": "Validation error or no profile", "model": ErrorResponse},
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
    404: {"description": "Entry not found", "model": ErrorResponse},
}


@router.get("/me", response_model=ProfileResponse, responses=_NO_PROFILE,
            summary="Get current user's profile")
async def get_my_profile(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.get_me(db, user)


@router.post("", response_model=ProfileResponse,
             responses={400: {"description": "Validation error", "model": ErrorResponse}},
             summary="Create or update user profile")
async def upsert_profile(
    body: ProfileRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.upsert(db, user, body)


@router.get("", response_model=List[ProfileResponse], summary="Get all profiles")
async def list_profiles(db: AsyncSession = Depends(get_db_session)) -> List[ProfileResponse]:
    return await profile_service.list_profiles(db)


@router.get("/user/{user_id}", response_model=ProfileResponse,
            responses={400: {"description": "Profile not found", "model": ErrorResponse}},
            summary="Get profile by user ID")
async def get_profile_by_user(
    user_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.get_by_user_id(db, user_id)


@router.delete("", response_model=MessageResponse,
               summary="Delete profile, user and posts")
async def delete_account(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await profile_service.delete_account(db, user)


# ── Experience ────────────────────────────────────────────────────────────

@router.put("/experience", response_model=ProfileResponse, responses=_ENTRY_ERRORS,
            summary="Add profile experience")
async def add_experience(
    body: ExperienceRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.add_experience(db, user, body)


@router.put("/experience/{exp_id}", response_model=ProfileResponse, responses=_ENTRY_ERRORS,
            summary="Replace a profile experience entry")
async def update_experience(
    exp_id: str,
    body: ExperienceRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.update_experience(db, user, exp_id, body)


@router.delete("/experience/{exp_id}", response_model=ProfileResponse,
               responses=_ENTRY_ERRORS, summary="Delete experience from profile")
async def delete_experience(
    exp_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.remove_experience(db, user, exp_id)


# ── Education ─────────────────────────────────────────────────────────────

@router.put("/education", response_model=ProfileResponse, responses=_ENTRY_ERRORS,
            summary="Add profile education")
async def add_education(
    body: EducationRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.add_education(db, user, body)


@router.put("/education/{edu_id}", response_model=ProfileResponse, responses=_ENTRY_ERRORS,
            summary="Replace a profile education entry")
async def update_education(
    edu_id: str,
    body: EducationRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.update_education(db, user, edu_id, body)


@router.delete("/education/{edu_id}", response_model=ProfileResponse,
               responses=_ENTRY_ERRORS, summary="Delete education from profile")
async def delete_education(
    edu_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await profile_service.remove_education(db, user, edu_id)
