"""
DevConnector Backend: Post Routes
==================================

All post endpoints require a token.

    POST   /api/posts                              create post
    GET    /api/posts                              list, newest first
    GET    /api/posts/{post_id}                    one post
    DELETE /api/posts/{post_id}                    delete own post
    PUT    /api/posts/likes/{post_id}              like
    DELETE /api/posts/likes/{post_id}              unlike
    POST   /api/posts/comment/{post_id}            add comment
    DELETE /api/posts/comment/{post_id}/{cid}      delete own comment
"""

from typing import List

from fastapi import APIRouter, Depends

from devconnector.dependencies import get_current_identity, get_post_service
from devconnector.schemas.common import ErrorResponse
from devconnector.schemas.post import (
    CommentEntry,
    CommentRequest,
    LikeEntry,
    PostRequest,
    PostResponse,
)
from devconnector.security import UserIdentity
from devconnector.services import PostService

router = APIRouter(
    prefix="/api/posts",
    tags=["Posts"],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)

_NOT_FOUND = {404: {"description": "Post not found", "model": ErrorResponse}}
_BAD_REQUEST = {400: {"description": "Invalid input or state", "model": ErrorResponse}}


@router.post("", response_model=PostResponse, responses=_BAD_REQUEST, summary="Create a post")
async def create_post(
    body: PostRequest,
    identity: UserIdentity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    return await service.create(identity, body)


@router.get("", response_model=List[PostResponse], summary="List posts, newest first")
async def list_posts(
    identity: UserIdentity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> List[PostResponse]:
    return await service.list_recent()


@router.get("/{post_id}", response_model=PostResponse, responses=_NOT_FOUND, summary="Get a post")
async def get_post(
    post_id: str,
    identity: UserIdentity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    return await service.get(post_id)


@router.delete(
    "/{post_id}",
    response_model=PostResponse,
    responses=_NOT_FOUND,
    summary="Delete one of your posts",
)
async def delete_post(
    post_id: str,
    identity: UserIdentity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    return await service.delete(identity, post_id)


@router.put(
    "/likes/{post_id}",
    response_model=List[LikeEntry],
    responses={**_NOT_FOUND, **_BAD_REQUEST},
    summary="Like a post",
)
async def like_post(
    post_id: str,
    identity: UserIdentity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> List[LikeEntry]:
    return await service.like(identity, post_id)


@router.delete(
    "/likes/{post_id}",
    response_model=List[LikeEntry],
    responses={**_NOT_FOUND, **_BAD_REQUEST},
    summary="Remove your like from a post",
)
async def unlike_post(
    post_id: str,
    identity: UserIdentity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> List[LikeEntry]:
    return await service.unlike(identity, post_id)


@router.post(
    "/comment/{post_id}",
    response_model=List[CommentEntry],
    responses={**_NOT_FOUND, **_BAD_REQUEST},
    summary="Comment on a post",
)
async def add_comment(
    post_id: str,
    body: CommentRequest,
    identity: UserIdentity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> List[CommentEntry]:
    return await service.comment(identity, post_id, body)


@router.delete(
    "/comment/{post_id}/{comment_id}",
    response_model=List[CommentEntry],
    responses=_NOT_FOUND,
    summary="Delete one of your comments",
)
async def delete_comment(
    post_id: str,
    comment_id: str,
    identity: UserIdentity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> List[CommentEntry]:
    return await service.delete_comment(identity, post_id, comment_id)
