"""
DevConnector Backend - Profile SQLAlchemy Model
===============================================

What:  ORM model for the `profiles` table (the Profile Store).
How:   Scalar fields are columns; `skills`, `social`, `experience` and
       `education` are JSON document columns (JSONB on PostgreSQL). The row is
       the aggregate: it is loaded, mutated in memory and written back whole.

Uniqueness:
    `user_id` is unique: at most one profile per user.

Mutation note:
    JSON columns are not change-tracked in place. The mutation engine always
    assigns a fresh list, which SQLAlchemy detects as a change.
"""

from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import JSON, ForeignKey, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import TIMESTAMP

from app.database import Base
from app.models.user import User, new_id, utcnow

# Portable JSON column: JSONB where available, generic JSON elsewhere (SQLite)
Document = JSON().with_variant(JSONB(), "postgresql")


class Profile(Base):
    """
    A user's public developer profile.

    Sub-collection ordering:
        experience and education are newest-first; new entries go to index 0.
    """

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    user_id: Mapped[str] = mapped_column(
        "user",
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        comment="Owning user; one profile per user",
    )

    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    githubusername: Mapped[str | None] = mapped_column(String(255), nullable=True)

    skills: Mapped[List[str]] = mapped_column(Document, nullable=False, default=list)
    social: Mapped[Dict[str, str]] = mapped_column(Document, nullable=False, default=dict)
    experience: Mapped[List[Dict[str, Any]]] = mapped_column(
        Document, nullable=False, default=list
    )
    education: Mapped[List[Dict[str, Any]]] = mapped_column(
        Document, nullable=False, default=list
    )

    date: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # Populated owner (name, avatar) for every profile response
    user: Mapped[User] = relationship(lazy="joined")

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, user='{self.user_id}')>"
