"""
DevConnector Backend - Auth Service (Identity Store operations)
===============================================================

What:  Registration, login and user lookup.
How:   Validates input, talks to the `users` table through the request's
       session, and issues tokens through app.security.
Who:   /api/users and /api/auth routes; the auth gate for lookups.

Credential errors:
    Unknown e-mail and wrong password produce the same "Invalid Credentials"
    400 so the endpoint cannot be used to probe which e-mails are registered.
"""

import logging
import re
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.exceptions import StoreError, ValidationError
from app.models.user import User, new_id, utcnow
from app.schemas.user import TokenResponse, UserResponse
from app.security import create_access_token, gravatar_url, hash_password, verify_password
from app.services.mutations import is_blank

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6


def _email_error(email: Optional[str]) -> List[Dict[str, str]]:
    if is_blank(email) or not EMAIL_PATTERN.match(email.strip()):
        return [{"field": "email", "message": "Please include a valid email"}]
    return []


class AuthService:
    """Stateless; sessions and settings are passed per call."""

    async def register(
        self,
        db: AsyncSession,
        settings: Settings,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> TokenResponse:
        """
        Create an account and return a token for it.

        Raises:
            ValidationError: missing name, malformed e-mail, short password,
                or the e-mail is already registered.
            StoreError: the insert failed for any other reason.
        """
        errors: List[Dict[str, str]] = []
        if is_blank(name):
            errors.append({"field": "name", "message": "Name is required"})
        errors.extend(_email_error(email))
        if password is None or len(password) < MIN_PASSWORD_LENGTH:
            errors.append({
                "field": "password",
                "message": f"Please enter a password with {MIN_PASSWORD_LENGTH} or more characters",
            })
        if errors:
            raise ValidationError.from_fields(errors)

        normalized_email = email.strip().lower()
        if await self.find_by_email(db, normalized_email) is not None:
            raise ValidationError(message="User already exists", field="email")

        user = User(
            id=new_id(),
            name=name.strip(),
            email=normalized_email,
            password=hash_password(password),
            avatar=gravatar_url(normalized_email),
            date=utcnow(),
        )
        try:
            db.add(user)
            await db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same e-mail
            raise ValidationError(message="User already exists", field="email") from e
        except SQLAlchemyError as e:
            logger.error("Database error registering %s: %s", normalized_email, str(e))
            raise StoreError(context={"operation": "register"}) from e

        logger.info("Registered user %s", user.id)
        return TokenResponse(token=create_access_token(user.id, settings))

    async def login(
        self,
        db: AsyncSession,
        settings: Settings,
        email: Optional[str],
        password: Optional[str],
    ) -> TokenResponse:
        """
        Exchange e-mail and password for a token.

        Raises:
            ValidationError: malformed input or "Invalid Credentials".
        """
        errors = _email_error(email)
        if is_blank(password):
            errors.append({"field": "password", "message": "Password is required"})
        if errors:
            raise ValidationError.from_fields(errors)

        user = await self.find_by_email(db, email.strip().lower())
        if user is None or not verify_password(password, user.password):
            raise ValidationError(message="Invalid Credentials")

        return TokenResponse(token=create_access_token(user.id, settings))

    async def find_user(self, db: AsyncSession, user_id: str) -> Optional[User]:
        try:
            return await db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error("Database error loading user %s: %s", user_id, str(e))
            raise StoreError(context={"user_id": user_id}) from e

    async def find_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        try:
            result = await db.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up user by email: %s", str(e))
            raise StoreError(context={"operation": "find_by_email"}) from e

    def describe(self, user: User) -> UserResponse:
        """The current user as returned by GET /api/auth."""
        return UserResponse.model_validate(user)


auth_service = AuthService()
