"""
DevConnector Backend - User SQLAlchemy Model
============================================

What:  ORM model for the `users` table (the Identity Store).
Who:   AuthService creates and looks users up; profiles and posts reference them.

Table Design:
    - id: opaque UUID string, compared by exact string equality
    - email: unique, stored lower-cased so lookups are case-insensitive
    - password: passlib hash, never returned by any response schema
    - avatar: Gravatar URL derived from the e-mail at registration
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TIMESTAMP

from app.database import Base


def new_id() -> str:
    """Fresh opaque identifier for aggregates and sub-entities."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """A registered account. Immutable after creation except for deletion."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Lower-cased login e-mail",
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Salted password hash (pbkdf2_sha256)",
    )

    avatar: Mapped[str | None] = mapped_column(String(255), nullable=True)

    date: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
