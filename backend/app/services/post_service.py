"""
DevConnector Backend - Post Service
===================================

What:  Post creation, the feed, single-post reads, deletion, likes and comments.
How:   load post → mutation engine → commit.
Who:   /api/posts routes.

Snapshots:
    A post (and each comment) stores the author's name and avatar as they
    were at creation. Later account changes are not propagated.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError, StoreError
from app.models.post import Post
from app.models.user import User, new_id, utcnow
from app.schemas.common import MessageResponse
from app.schemas.post import CommentItem, LikeItem, PostResponse
from app.services import mutations

logger = logging.getLogger(__name__)


class PostService:
    """Stateless post operations; every method takes the request session."""

    async def _load(self, db: AsyncSession, post_id: str) -> Post:
        try:
            post = await db.get(Post, post_id)
        except SQLAlchemyError as e:
            logger.error("Database error loading post %s: %s", post_id, str(e))
            raise StoreError(context={"post_id": post_id}) from e
        if post is None:
            raise NotFoundError(resource="post", resource_id=post_id, message="Post not found")
        return post

    async def create_post(self, db: AsyncSession, user: User, text) -> PostResponse:
        """
        Publish a post with a snapshot of the author's name and avatar.

        Raises:
            ValidationError: empty text.
        """
        mutations.require_fields({"text": text}, (("text", "Text is required"),))
        post = Post(
            id=new_id(),
            user_id=user.id,
            text=text,
            name=user.name,
            avatar=user.avatar,
            likes=[],
            comments=[],
            date=utcnow(),
        )
        db.add(post)
        await self._commit(db, "create_post")
        logger.info("User %s created post %s", user.id, post.id)
        return PostResponse.model_validate(post)

    async def list_posts(self, db: AsyncSession) -> List[PostResponse]:
        """All posts, newest first."""
        try:
            result = await db.execute(select(Post).order_by(Post.date.desc()))
            posts = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise StoreError(context={"operation": "list_posts"}) from e
        return [PostResponse.model_validate(p) for p in posts]

    async def get_post(self, db: AsyncSession, post_id: str) -> PostResponse:
        return PostResponse.model_validate(await self._load(db, post_id))

    async def delete_post(self, db: AsyncSession, user: User, post_id: str) -> MessageResponse:
        """
        Delete a post. Only its creator may.

        Raises:
            NotFoundError: no such post (404).
            AuthorizationError: caller is not the creator (401); the post stays.
        """
        post = await self._load(db, post_id)
        mutations.ensure_can_delete_post(post, user.id)
        try:
            await db.delete(post)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting post %s: %s", post_id, str(e), exc_info=True)
            raise StoreError(context={"operation": "delete_post"}) from e
        logger.info("User %s deleted post %s", user.id, post_id)
        return MessageResponse(msg="Post removed")

    async def toggle_like(self, db: AsyncSession, user: User, post_id: str) -> List[LikeItem]:
        post = await self._load(db, post_id)
        likes = mutations.toggle_like(post, user.id)
        await self._commit(db, "toggle_like")
        return [LikeItem.model_validate(like) for like in likes]

    async def add_comment(self, db: AsyncSession, user: User, post_id: str,
                          text) -> List[CommentItem]:
        post = await self._load(db, post_id)
        comments = mutations.add_comment(post, text, user.id, user.name, user.avatar)
        await self._commit(db, "add_comment")
        return [CommentItem.model_validate(comment) for comment in comments]

    async def remove_comment(self, db: AsyncSession, user: User, post_id: str,
                             comment_id: str) -> PostResponse:
        post = await self._load(db, post_id)
        mutations.remove_comment(post, comment_id, user.id)
        await self._commit(db, "remove_comment")
        return PostResponse.model_validate(post)

    async def _commit(self, db: AsyncSession, operation: str) -> None:
        """Commit before the response is built, so a failed write answers 500."""
        try:
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error during %s: %s", operation, str(e), exc_info=True)
            raise StoreError(context={"operation": operation}) from e


post_service = PostService()
