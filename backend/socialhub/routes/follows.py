"""
SocialHub Backend — Follow Routes
==================================

What:  The follow graph under /api/follows.

Access policy:
    POST   /{follower_id}/follow/{following_id}     caller must be {follower_id}
    DELETE /{follower_id}/unfollow/{following_id}   caller must be {follower_id}
    GET    everything else                          public

/{user_id}/following/count and /{user_id}/following/relationships are
declared before /{follower_id}/following/{following_id}.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.database import get_db_session
from socialhub.models.user import User
from socialhub.schemas.common import ErrorResponse, MessageResponse
from socialhub.schemas.follow import FollowResponse
from socialhub.schemas.user import UserResponse
from socialhub.security.dependencies import ensure_actor, require_identity
from socialhub.services.follow_service import follow_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/follows",
    tags=["Follows"],
    responses={404: {"description": "User or relationship not found", "model": ErrorResponse}},
)


@router.post(
    "/{follower_id}/follow/{following_id}",
    response_model=FollowResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Cannot follow yourself", "model": ErrorResponse},
        401: {"description": "Not authenticated", "model": ErrorResponse},
        403: {"description": "Caller is not the follower", "model": ErrorResponse},
        409: {"description": "Already following", "model": ErrorResponse},
    },
    summary="Follow a user",
)
async def follow_user(
    follower_id: int,
    following_id: int,
    identity: User = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> FollowResponse:
    ensure_actor(identity, follower_id)
    return await follow_service.follow(db, follower_id, following_id)


@router.delete(
    "/{follower_id}/unfollow/{following_id}",
    response_model=MessageResponse,
    responses={
        401: {"description": "Not authenticated", "model": ErrorResponse},
        403: {"description": "Caller is not the follower", "model": ErrorResponse},
    },
    summary="Unfollow a user",
)
async def unfollow_user(
    follower_id: int,
    following_id: int,
    identity: User = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    ensure_actor(identity, follower_id)
    await follow_service.unfollow(db, follower_id, following_id)
    return MessageResponse(message="Successfully unfollowed user")


@router.get("/{user_id}/following", response_model=List[UserResponse], summary="Users this user follows")
async def get_following(user_id: int, db: AsyncSession = Depends(get_db_session)) -> List[UserResponse]:
    return await follow_service.following(db, user_id)


@router.get("/{user_id}/followers", response_model=List[UserResponse], summary="Users following this user")
async def get_followers(user_id: int, db: AsyncSession = Depends(get_db_session)) -> List[UserResponse]:
    return await follow_service.followers(db, user_id)


@router.get("/{user_id}/following/count", response_model=int, summary="Number of users followed")
async def get_following_count(user_id: int, db: AsyncSession = Depends(get_db_session)) -> int:
    return await follow_service.following_count(db, user_id)


@router.get("/{user_id}/followers/count", response_model=int, summary="Number of followers")
async def get_followers_count(user_id: int, db: AsyncSession = Depends(get_db_session)) -> int:
    return await follow_service.followers_count(db, user_id)


@router.get(
    "/{user_id}/following/relationships",
    response_model=List[FollowResponse],
    summary="Outgoing follow edges",
)
async def get_following_relationships(
    user_id: int, db: AsyncSession = Depends(get_db_session)
) -> List[FollowResponse]:
    return await follow_service.following_relationships(db, user_id)


@router.get(
    "/{user_id}/followers/relationships",
    response_model=List[FollowResponse],
    summary="Incoming follow edges",
)
async def get_follower_relationships(
    user_id: int, db: AsyncSession = Depends(get_db_session)
) -> List[FollowResponse]:
    return await follow_service.follower_relationships(db, user_id)


@router.get(
    "/{follower_id}/following/{following_id}",
    response_model=bool,
    summary="Does one user follow another?",
)
async def is_following(
    follower_id: int, following_id: int, db: AsyncSession = Depends(get_db_session)
) -> bool:
    return await follow_service.is_following(db, follower_id, following_id)


@router.get(
    "/{user_id1}/mutual/{user_id2}",
    response_model=List[UserResponse],
    summary="Users both users follow",
)
async def mutual_following(
    user_id1: int, user_id2: int, db: AsyncSession = Depends(get_db_session)
) -> List[UserResponse]:
    return await follow_service.mutual_following(db, user_id1, user_id2)


@router.get(
    "/{user_id}/suggestions",
    response_model=List[UserResponse],
    summary="Accounts followed by the people you follow",
)
async def suggestions(
    user_id: int,
    limit: int = Query(default=10, ge=1, le=50),
    db: AsyncSession = Depends(get_db_session),
) -> List[UserResponse]:
    return await follow_service.suggestions(db, user_id, limit)


@router.get(
    "/{follower_id}/relationship/{following_id}",
    response_model=FollowResponse,
    summary="The follow edge between two users",
)
async def get_relationship(
    follower_id: int, following_id: int, db: AsyncSession = Depends(get_db_session)
) -> FollowResponse:
    return await follow_service.get_relationship(db, follower_id, following_id)
