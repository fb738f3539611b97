"""
DevConnector Backend - Post SQLAlchemy Model
============================================

What:  ORM model for the `posts` table (the Post Store).
How:   `likes` and `comments` are JSON document columns holding the nested
       sub-collections. `name` and `avatar` are snapshots of the author taken
       at creation and never re-synced.

Query Patterns:
    - Feed: ORDER BY date DESC (idx_posts_date)
    - Account deletion: DELETE WHERE user = :id (idx_posts_user)
"""

from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy import text as sql_text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TIMESTAMP

from app.database import Base
from app.models.profile import Document
from app.models.user import new_id, utcnow


class Post(Base):
    """A post in the feed, with its likes and comments embedded."""

    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    user_id: Mapped[str] = mapped_column(
        "user",
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Creator of the post",
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # [{"user": id}], newest first, at most one per user
    likes: Mapped[List[Dict[str, Any]]] = mapped_column(Document, nullable=False, default=list)
    # [{"id", "user", "text", "name", "avatar", "date"}], newest first
    comments: Mapped[List[Dict[str, Any]]] = mapped_column(
        Document, nullable=False, default=list
    )

    date: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=sql_text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_posts_date", date.desc()),
        Index("idx_posts_user", user_id),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user='{self.user_id}')>"
