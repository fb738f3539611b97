"""
DevConnector Backend - Post Route Handlers
==========================================

What:  The post feed, likes and comments. Every route is private.

Route order matters: /like/{post_id} and /comment/... are registered before
/{post_id} so their first segment is never read as a post id.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.post import CommentItem, CommentRequest, LikeItem, PostRequest, PostResponse
from app.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/posts", tags=["Posts"])

_POST_NOT_FOUND = {404: {"description": "Post not found", "model": ErrorResponse}}
_NOT_OWNER = {401: {"description": "User not authorized", "model": ErrorResponse}}


@router.post("", response_model=PostResponse,
             responses={400: {"description": "Text is required", "model": ErrorResponse}},
             summary="Create a post")
async def create_post(
    body: PostRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.create_post(db, user, body.text)


@router.get("", response_model=List[PostResponse], summary="Get all posts, newest first")
async def list_posts(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[PostResponse]:
    return await post_service.list_posts(db)


@router.put("/like/{post_id}", response_model=List[LikeItem], responses=_POST_NOT_FOUND,
            summary="Like or unlike a post")
async def toggle_like(
    post_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[LikeItem]:
    return await post_service.toggle_like(db, user, post_id)


@router.post("/comment/{post_id}", response_model=List[CommentItem],
             responses={**_POST_NOT_FOUND,
                        400: {"description": "Text is required", "model": ErrorResponse}},
             summary="Comment on a post")
async def add_comment(
    post_id: str,
    body: CommentRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[CommentItem]:
    return await post_service.add_comment(db, user, post_id, body.text)


@router.delete("/comment/{post_id}/{comment_id}", response_model=PostResponse,
               responses={**_POST_NOT_FOUND, **_NOT_OWNER}, summary="Delete a comment")
async def delete_comment(
    post_id: str,
    comment_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.remove_comment(db, user, post_id, comment_id)


@router.get("/{post_id}", response_model=PostResponse, responses=_POST_NOT_FOUND,
            summary="Get post by ID")
async def get_post(
    post_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.get_post(db, post_id)


@router.delete("/{post_id}", response_model=MessageResponse,
               responses={**_POST_NOT_FOUND, **_NOT_OWNER}, summary="Delete a post")
async def delete_post(
    post_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await post_service.delete_post(db, user, post_id)
