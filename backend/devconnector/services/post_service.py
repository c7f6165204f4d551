"""
DevConnector Backend: Post Service
===================================

What:  Posts, likes and comments.
Who:   Called by the /api/posts route handlers.

Sub-collection rules (enforced inside the repository's mutation callback,
so a rejected change never reaches the database):
    like        caller must not already be in likes      → 400 otherwise
    unlike      caller must be in likes                  → 400 otherwise
    uncomment   a comment with {id, author == caller}    → 404 otherwise

New likes and comments go to the front of their list (newest first).

Author snapshot:
    name/avatar are copied from the user at write time and never refreshed.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from devconnector.exceptions import NotFoundError, UnauthorizedError, ValidationError
from devconnector.repositories import PostRepository, UserRepository
from devconnector.repositories.base import parse_id
from devconnector.schemas.post import (
    CommentEntry,
    CommentRequest,
    LikeEntry,
    PostRequest,
    PostResponse,
    comments_response,
    likes_response,
)
from devconnector.security import UserIdentity

logger = logging.getLogger(__name__)


def _post_not_found() -> NotFoundError:
    return NotFoundError(message="Post not found")


class PostService:
    def __init__(self, posts: PostRepository, users: UserRepository):
        self.posts = posts
        self.users = users

    async def create(self, identity: UserIdentity, request: PostRequest) -> PostResponse:
        # The token is trusted without a lookup, so the author may be gone
        user = await self.users.find_by_id(identity.id)
        if user is None:
            raise NotFoundError(message="User not found")

        post = await self.posts.create(
            user_id=user.id,
            text=request.text,
            name=user.name,
            avatar=user.avatar,
        )
        logger.info("User %s created post %s", user.id, post.id)
        return PostResponse.model_validate(post)

    async def list_recent(self) -> List[PostResponse]:
        posts = await self.posts.list_recent()
        return [PostResponse.model_validate(post) for post in posts]

    async def get(self, post_id: str) -> PostResponse:
        post = await self.posts.find_by_id(post_id)
        if post is None:
            raise _post_not_found()
        return PostResponse.model_validate(post)

    async def delete(self, identity: UserIdentity, post_id: str) -> PostResponse:
        """
        Delete a post owned by the caller; returns the deleted post.

        Raises:
            NotFoundError:     no such post (→ 404)
            UnauthorizedError: caller is not the author (→ 401)
        """
        post = await self.posts.find_by_id(post_id)
        if post is None:
            raise _post_not_found()
        if post.user_id != parse_id(identity.id):
            logger.warning("User %s tried to delete post %s of %s", identity.id, post.id, post.user_id)
            raise UnauthorizedError()

        await self.posts.delete(post.id)
        logger.info("Post %s deleted by its author", post.id)
        return PostResponse.model_validate(post)

    async def like(self, identity: UserIdentity, post_id: str) -> List[LikeEntry]:
        def add_like(likes: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
            if any(like.get("user") == identity.id for like in likes):
                raise ValidationError(message="Post already liked")
            return [{"id": str(uuid.uuid4()), "user": identity.id}] + likes

        post = await self.posts.mutate_likes(post_id, add_like)
        if post is None:
            raise _post_not_found()
        return likes_response(post.likes)

    async def unlike(self, identity: UserIdentity, post_id: str) -> List[LikeEntry]:
        def remove_like(likes: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
            remaining = [like for like in likes if like.get("user") != identity.id]
            if len(remaining) == len(likes):
                raise ValidationError(message="Post has not yet been liked")
            return remaining

        post = await self.posts.mutate_likes(post_id, remove_like)
        if post is None:
            raise _post_not_found()
        return likes_response(post.likes)

    async def comment(
        self, identity: UserIdentity, post_id: str, request: CommentRequest
    ) -> List[CommentEntry]:
        user = await self.users.find_by_id(identity.id)
        if user is None:
            raise NotFoundError(message="User not found")

        new_comment = {
            "id": str(uuid.uuid4()),
            "user": str(user.id),
            "text": request.text,
            "name": user.name,
            "avatar": user.avatar,
            "date": datetime.now(timezone.utc).isoformat(),
        }
        post = await self.posts.mutate_comments(post_id, lambda comments: [new_comment] + comments)
        if post is None:
            raise _post_not_found()
        return comments_response(post.comments)

    async def delete_comment(
        self, identity: UserIdentity, post_id: str, comment_id: str
    ) -> List[CommentEntry]:
        def remove_comment(comments: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
            for index, comment in enumerate(comments):
                if comment.get("id") == comment_id and comment.get("user") == identity.id:
                    return comments[:index] + comments[index + 1:]
            raise NotFoundError(message="Comment not found")

        post = await self.posts.mutate_comments(post_id, remove_comment)
        if post is None:
            raise _post_not_found()
        return comments_response(post.comments)
