"""
DevConnector Backend - Password Hashing & Tokens
================================================

What:  Password hashing (passlib), JWT issuance/decoding (python-jose) and
       Gravatar avatar URLs.
Who:   AuthService when registering and logging in; the auth gate when
       resolving a bearer token.

Token payload:
    {"user": {"id": "<user id>"}, "exp": <unix time>}
"""

import hashlib
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import Settings
from app.exceptions import AuthenticationError

# pbkdf2_sha256 avoids the native bcrypt dependency
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: str, settings: Settings,
                        expires_delta: Optional[timedelta] = None) -> str:
    """Signed token identifying `user_id`, valid for `jwt_expire_seconds` by default."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(seconds=settings.jwt_expire_seconds)
    )
    payload = {"user": {"id": user_id}, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> str:
    """
    Resolve a token to the user id it was issued for.

    Raises:
        AuthenticationError: bad signature, expired, or malformed payload.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise AuthenticationError(message="Token is not valid") from e

    user = payload.get("user")
    user_id = user.get("id") if isinstance(user, dict) else None
    if not user_id:
        raise AuthenticationError(message="Token is not valid")
    return user_id


def gravatar_url(email: str) -> str:
    """Gravatar image for `email`: 200px, PG-rated, mystery-man fallback."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"//www.gravatar.com/avatar/{digest}?s=200&r=pg&d=mm"
