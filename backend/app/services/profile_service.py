"""
DevConnector Backend - Profile Service
======================================

What:  Orchestrates profile reads, the create-or-update upsert, account
       deletion, and the experience/education mutations.
How:   load aggregate → mutation engine → commit. Each operation commits its
       own unit of work before returning, so the response never reports a
       write that did not persist.
Who:   /api/profile routes.

Missing-profile responses:
    Profile routes answer a missing profile with 400 ("There is no profile
    for this user" / "Profile not found"), so NotFoundError is raised with
    status_code=400 here. A missing experience/education entry is a 404.

Account deletion:
    DELETE /api/profile removes the caller's posts, profile and user in the
    same transaction. Likes and comments the user left on other people's
    posts stay, carrying their name/avatar snapshot.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError, StoreError, ValidationError
from app.models.post import Post
from app.models.profile import Profile
from app.models.user import User, new_id, utcnow
from app.schemas.common import MessageResponse
from app.schemas.profile import (
    SOCIAL_PLATFORMS,
    EducationRequest,
    ExperienceRequest,
    ProfileRequest,
    ProfileResponse,
)
from app.services import mutations

logger = logging.getLogger(__name__)

NO_PROFILE_MESSAGE = "There is no profile for this user"
PROFILE_NOT_FOUND_MESSAGE = "Profile not found"


def split_skills(skills) -> List[str]:
    """Accepts ["a", "b"] or "a, b"; trims and drops empty items."""
    if skills is None:
        return []
    if isinstance(skills, str):
        skills = skills.split(",")
    return [skill.strip() for skill in skills if skill and skill.strip()]


class ProfileService:
    """Stateless profile operations; every method takes the request session."""

    # ── Reads ─────────────────────────────────────────────────────────────

    async def _load(self, db: AsyncSession, user_id: str) -> Optional[Profile]:
        try:
            result = await db.execute(select(Profile).where(Profile.user_id == user_id))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error loading profile of %s: %s", user_id, str(e))
            raise StoreError(context={"user_id": user_id}) from e

    async def _load_own(self, db: AsyncSession, user: User) -> Profile:
        profile = await self._load(db, user.id)
        if profile is None:
            raise NotFoundError(resource="profile", message=NO_PROFILE_MESSAGE, status_code=400)
        return profile

    async def get_me(self, db: AsyncSession, user: User) -> ProfileResponse:
        return ProfileResponse.model_validate(await self._load_own(db, user))

    async def get_by_user_id(self, db: AsyncSession, user_id: str) -> ProfileResponse:
        profile = await self._load(db, user_id)
        if profile is None:
            raise NotFoundError(
                resource="profile", message=PROFILE_NOT_FOUND_MESSAGE, status_code=400
            )
        return ProfileResponse.model_validate(profile)

    async def list_profiles(self, db: AsyncSession) -> List[ProfileResponse]:
        try:
            result = await db.execute(select(Profile).order_by(Profile.date.desc()))
            profiles = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing profiles: %s", str(e), exc_info=True)
            raise StoreError(context={"operation": "list_profiles"}) from e
        return [ProfileResponse.model_validate(p) for p in profiles]

    # ── Upsert ────────────────────────────────────────────────────────────

    async def upsert(self, db: AsyncSession, user: User, body: ProfileRequest) -> ProfileResponse:
        """
        Create the caller's profile, or update it in place.

        Only fields present (non-empty) in the body are written; the social
        mapping is rebuilt from the body every time. Experience and education
        are never touched by an upsert.

        Raises:
            ValidationError: status or skills missing.
        """
        errors = []
        if mutations.is_blank(body.status):
            errors.append({"field": "status", "message": "Status is required"})
        skills = split_skills(body.skills)
        if not skills:
            errors.append({"field": "skills", "message": "Skills is required"})
        if errors:
            raise ValidationError.from_fields(errors)

        fields: Dict[str, Any] = {}
        for name in ("company", "website", "location", "bio", "status", "githubusername"):
            value = getattr(body, name)
            if not mutations.is_blank(value):
                fields[name] = value.strip()
        fields["skills"] = skills
        fields["social"] = {
            platform: getattr(body, platform).strip()
            for platform in SOCIAL_PLATFORMS
            if not mutations.is_blank(getattr(body, platform))
        }

        profile = await self._load(db, user.id)
        if profile is not None:
            mutations.ensure_owner(profile.user_id, user.id, "profile")
            for name, value in fields.items():
                setattr(profile, name, value)
            action = "Updated"
        else:
            profile = Profile(
                id=new_id(),
                user_id=user.id,
                user=user,
                experience=[],
                education=[],
                date=utcnow(),
                **fields,
            )
            db.add(profile)
            action = "Created"

        await self._commit(db, "upsert_profile")
        logger.info("%s profile %s for user %s", action, profile.id, user.id)
        return ProfileResponse.model_validate(profile)

    # ── Account deletion ──────────────────────────────────────────────────

    async def delete_account(self, db: AsyncSession, user: User) -> MessageResponse:
        """Remove the caller's posts, profile and user."""
        try:
            await db.execute(delete(Post).where(Post.user_id == user.id))
            profile = await self._load(db, user.id)
            if profile is not None:
                await db.delete(profile)
            await db.delete(user)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting account %s: %s", user.id, str(e), exc_info=True)
            raise StoreError(context={"operation": "delete_account"}) from e

        logger.info("Deleted account %s with its profile and posts", user.id)
        return MessageResponse(msg="User deleted")

    # ── Experience / education ────────────────────────────────────────────

    async def _mutate(self, db: AsyncSession, user: User,
                      operation: Callable[..., Profile], *args) -> ProfileResponse:
        profile = await self._load_own(db, user)
        operation(profile, *args, user.id)
        await self._commit(db, operation.__name__)
        return ProfileResponse.model_validate(profile)

    async def add_experience(self, db: AsyncSession, user: User,
                             body: ExperienceRequest) -> ProfileResponse:
        return await self._mutate(
            db, user, mutations.add_experience, body.model_dump(by_alias=True)
        )

    async def update_experience(self, db: AsyncSession, user: User, exp_id: str,
                                body: ExperienceRequest) -> ProfileResponse:
        return await self._mutate(
            db, user, mutations.update_experience, exp_id, body.model_dump(by_alias=True)
        )

    async def remove_experience(self, db: AsyncSession, user: User,
                                exp_id: str) -> ProfileResponse:
        return await self._mutate(db, user, mutations.remove_experience, exp_id)

    async def add_education(self, db: AsyncSession, user: User,
                            body: EducationRequest) -> ProfileResponse:
        return await self._mutate(
            db, user, mutations.add_education, body.model_dump(by_alias=True)
        )

    async def update_education(self, db: AsyncSession, user: User, edu_id: str,
                               body: EducationRequest) -> ProfileResponse:
        return await self._mutate(
            db, user, mutations.update_education, edu_id, body.model_dump(by_alias=True)
        )

    async def remove_education(self, db: AsyncSession, user: User,
                               edu_id: str) -> ProfileResponse:
        return await self._mutate(db, user, mutations.remove_education, edu_id)

    # ── Persistence ───────────────────────────────────────────────────────

    async def _commit(self, db: AsyncSession, operation: str) -> None:
        """Commit before the response is built, so a failed write answers 500."""
        try:
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error during %s: %s", operation, str(e), exc_info=True)
            raise StoreError(context={"operation": operation}) from e


profile_service = ProfileService()
