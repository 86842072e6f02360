"""
SocialHub Backend — Like Routes
================================

What:  Like, unlike, toggle and like statistics under /api/likes.
       Mutations require the caller to be {user_id}; reads are public.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.database import get_db_session
from socialhub.models.user import User
from socialhub.schemas.common import ErrorResponse, MessageResponse
from socialhub.schemas.like import LikeResponse, LikeToggleResponse, MostLikedPost
from socialhub.security.dependencies import ensure_actor, require_identity
from socialhub.services.like_service import like_service

router = APIRouter(
    prefix="/api/likes",
    tags=["Likes"],
    responses={404: {"description": "User, post or like not found", "model": ErrorResponse}},
)

_privileged = {
    401: {"description": "Not authenticated", "model": ErrorResponse},
    403: {"description": "Caller is not {user_id}", "model": ErrorResponse},
}


@router.get("/most-liked", response_model=List[MostLikedPost], summary="Posts with the most likes")
async def most_liked(
    limit: int = Query(default=10, ge=1, le=100),
    db: AsyncSession = Depends(get_db_session),
) -> List[MostLikedPost]:
    return await like_service.most_liked(db, limit)


@router.post(
    "/{user_id}/like/{post_id}",
    response_model=LikeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_privileged,
        400: {"description": "Cannot like your own post", "model": ErrorResponse},
        409: {"description": "Already liked", "model": ErrorResponse},
    },
    summary="Like a post",
)
async def like_post(
    user_id: int,
    post_id: int,
    identity: User = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> LikeResponse:
    ensure_actor(identity, user_id)
    return await like_service.like(db, user_id, post_id)


@router.delete(
    "/{user_id}/unlike/{post_id}",
    response_model=MessageResponse,
    responses=_privileged,
    summary="Remove a like",
)
async def unlike_post(
    user_id: int,
    post_id: int,
    identity: User = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    ensure_actor(identity, user_id)
    await like_service.unlike(db, user_id, post_id)
    return MessageResponse(message="Post unliked successfully")


@router.post(
    "/{user_id}/toggle/{post_id}",
    response_model=LikeToggleResponse,
    responses={**_privileged, 400: {"description": "Cannot like your own post", "model": ErrorResponse}},
    summary="Like if not liked, otherwise unlike",
)
async def toggle_like(
    user_id: int,
    post_id: int,
    identity: User = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> LikeToggleResponse:
    ensure_actor(identity, user_id)
    return await like_service.toggle(db, user_id, post_id)


@router.get("/{user_id}/has-liked/{post_id}", response_model=bool, summary="Has the user liked the post?")
async def has_liked(user_id: int, post_id: int, db: AsyncSession = Depends(get_db_session)) -> bool:
    return await like_service.has_liked(db, user_id, post_id)


@router.get("/post/{post_id}", response_model=List[LikeResponse], summary="Likes on a post")
async def post_likes(post_id: int, db: AsyncSession = Depends(get_db_session)) -> List[LikeResponse]:
    return await like_service.post_likes(db, post_id)


@router.get("/user/{user_id}", response_model=List[LikeResponse], summary="Likes given by a user")
async def user_likes(user_id: int, db: AsyncSession = Depends(get_db_session)) -> List[LikeResponse]:
    return await like_service.user_likes(db, user_id)


@router.get("/post/{post_id}/count", response_model=int, summary="Number of likes on a post")
async def post_like_count(post_id: int, db: AsyncSession = Depends(get_db_session)) -> int:
    return await like_service.post_like_count(db, post_id)


@router.get("/user/{user_id}/count", response_model=int, summary="Number of likes given by a user")
async def user_like_count(user_id: int, db: AsyncSession = Depends(get_db_session)) -> int:
    return await like_service.user_like_count(db, user_id)
