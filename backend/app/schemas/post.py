"""
DevConnector Backend - Post Schemas
===================================

What:  Request bodies for posts and comments; responses for posts, likes and
       comments.

`user` on a post is the creator's id. The ORM attribute is `user_id`, so the
response field reads it through a validation alias and still serializes as
"user".
"""

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field


class PostRequest(BaseModel):
    text: Optional[str] = None


class CommentRequest(BaseModel):
    text: Optional[str] = None


class LikeItem(BaseModel):
    user: str


class CommentItem(BaseModel):
    id: str
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: datetime


class PostResponse(BaseModel):
    id: str
    user: str = Field(validation_alias=AliasChoices("user_id", "user"))
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    likes: List[LikeItem] = Field(default_factory=list)
    comments: List[CommentItem] = Field(default_factory=list)
    date: datetime

    model_config = {"from_attributes": True}
