"""
DevConnector Backend: Post Schemas
===================================

Request bodies for posts and comments; responses for posts and their
embedded likes/comments. `user` always carries the author's user id.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from devconnector.validation import require


class PostRequest(BaseModel):
    """Body of POST /api/posts."""
    text: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("text", mode="before")
    @classmethod
    def _text_required(cls, value):
        return require(value, "Text is required")


class CommentRequest(PostRequest):
    """Body of POST /api/posts/comment/{id}; same constraint as a post."""


class LikeEntry(BaseModel):
    id: str
    user: uuid.UUID


class CommentEntry(BaseModel):
    id: str
    user: uuid.UUID
    text: str
    name: str
    avatar: str
    date: datetime


class PostResponse(BaseModel):
    id: uuid.UUID
    # Stored as user_id; re-validating a dumped response sees "user"
    user: uuid.UUID = Field(validation_alias=AliasChoices("user_id", "user"))
    text: str
    name: str
    avatar: str
    likes: List[LikeEntry] = Field(default_factory=list)
    comments: List[CommentEntry] = Field(default_factory=list)
    date: datetime

    model_config = {"from_attributes": True}


def likes_response(likes: Optional[List[dict]]) -> List[LikeEntry]:
    return [LikeEntry.model_validate(like) for like in likes or []]


def comments_response(comments: Optional[List[dict]]) -> List[CommentEntry]:
    return [CommentEntry.model_validate(comment) for comment in comments or []]
