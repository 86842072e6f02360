"""
SocialHub Backend — Comment Routes
===================================

What:  Comments under /api/comments.

Access policy:
    POST /{user_id}/comment/{post_id}   caller must be {user_id}
    PUT/DELETE /{comment_id}            caller must be the comment's author
    GET                                 public
"""

from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.database import get_db_session
from socialhub.models.user import User
from socialhub.routes.pagination import page_params, with_total_count
from socialhub.schemas.comment import CommentRequest, CommentResponse
from socialhub.schemas.common import ErrorResponse, MessageResponse, Page, PageParams
from socialhub.security.dependencies import ensure_actor, require_identity
from socialhub.services.comment_service import comment_service

router = APIRouter(
    prefix="/api/comments",
    tags=["Comments"],
    responses={404: {"description": "User, post or comment not found", "model": ErrorResponse}},
)

_privileged = {
    401: {"description": "Not authenticated", "model": ErrorResponse},
    403: {"description": "Not the acting user or author", "model": ErrorResponse},
}


@router.post(
    "/{user_id}/comment/{post_id}",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_privileged,
    summary="Comment on a post",
)
async def create_comment(
    user_id: int,
    post_id: int,
    request: CommentRequest,
    identity: User = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> CommentResponse:
    ensure_actor(identity, user_id)
    return await comment_service.create_comment(db, user_id, post_id, request.content)


@router.get("/search", response_model=List[CommentResponse], summary="Search comment text")
async def search_comments(
    text: str = Query(min_length=1, description="Case-insensitive substring"),
    db: AsyncSession = Depends(get_db_session),
) -> List[CommentResponse]:
    return await comment_service.search(db, text)


@router.get("/recent", response_model=List[CommentResponse], summary="Most recent comments")
async def recent_comments(
    limit: int = Query(default=10, ge=1, le=100),
    db: AsyncSession = Depends(get_db_session),
) -> List[CommentResponse]:
    return await comment_service.recent(db, limit)


@router.get("/post/{post_id}", response_model=List[CommentResponse], summary="Comments on a post, oldest first")
async def post_comments(post_id: int, db: AsyncSession = Depends(get_db_session)) -> List[CommentResponse]:
    return await comment_service.post_comments(db, post_id)


@router.get(
    "/post/{post_id}/paginated",
    response_model=Page[CommentResponse],
    summary="Comments on a post, oldest first, paginated",
)
async def post_comments_paginated(
    post_id: int,
    response: Response,
    params: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db_session),
) -> Page[CommentResponse]:
    return with_total_count(response, await comment_service.post_comments(db, post_id, params))


@router.get("/post/{post_id}/count", response_model=int, summary="Number of comments on a post")
async def post_comment_count(post_id: int, db: AsyncSession = Depends(get_db_session)) -> int:
    return await comment_service.post_comment_count(db, post_id)


@router.get("/user/{user_id}", response_model=List[CommentResponse], summary="Comments by a user, newest first")
async def user_comments(user_id: int, db: AsyncSession = Depends(get_db_session)) -> List[CommentResponse]:
    return await comment_service.user_comments(db, user_id)


@router.get("/{comment_id}", response_model=CommentResponse, summary="Get a comment by ID")
async def get_comment(comment_id: int, db: AsyncSession = Depends(get_db_session)) -> CommentResponse:
    return await comment_service.get_comment(db, comment_id)


@router.put("/{comment_id}", response_model=CommentResponse, responses=_privileged, summary="Edit your comment")
async def update_comment(
    comment_id: int,
    request: CommentRequest,
    identity: User = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> CommentResponse:
    return await comment_service.update_comment(db, identity, comment_id, request.content)


@router.delete("/{comment_id}", response_model=MessageResponse, responses=_privileged, summary="Delete your comment")
async def delete_comment(
    comment_id: int,
    identity: User = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await comment_service.delete_comment(db, identity, comment_id)
    return MessageResponse(message="Comment deleted successfully")
