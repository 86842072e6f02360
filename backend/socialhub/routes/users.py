"""
SocialHub Backend — User Routes
================================

What:  Profile reads, existence checks, search, update, delete and the
       follow lists under /api/users.

Access policy:
    GET     public
    PUT     requires identity; caller must be {user_id}
    DELETE  requires identity; caller must be {user_id}

Literal-prefixed paths (/username, /email, /exists, /search) are declared
before /{user_id} so they are never matched as an id.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.database import get_db_session
from socialhub.models.user import User
from socialhub.schemas.common import ErrorResponse, MessageResponse
from socialhub.schemas.user import UserResponse, UserUpdateRequest
from socialhub.security.dependencies import ensure_actor, require_identity
from socialhub.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/users",
    tags=["Users"],
    responses={404: {"description": "User not found", "model": ErrorResponse}},
)


@router.get("", response_model=List[UserResponse], summary="List all users")
async def list_users(db: AsyncSession = Depends(get_db_session)) -> List[UserResponse]:
    return await user_service.list_users(db)


@router.get("/username/{username}", response_model=UserResponse, summary="Get a user by username")
async def get_user_by_username(
    username: str, db: AsyncSession = Depends(get_db_session)
) -> UserResponse:
    return await user_service.get_by_username(db, username)


@router.get("/email/{email}", response_model=UserResponse, summary="Get a user by email")
async def get_user_by_email(email: str, db: AsyncSession = Depends(get_db_session)) -> UserResponse:
    return await user_service.get_by_email(db, email)


@router.get("/exists/username/{username}", response_model=bool, summary="Is a username taken?")
async def username_exists(username: str, db: AsyncSession = Depends(get_db_session)) -> bool:
    return await user_service.username_exists(db, username)


@router.get("/exists/email/{email}", response_model=bool, summary="Is an email registered?")
async def email_exists(email: str, db: AsyncSession = Depends(get_db_session)) -> bool:
    return await user_service.email_exists(db, email)


@router.get(
    "/search/firstname/{first_name}",
    response_model=List[UserResponse],
    summary="Search users by first name (case-insensitive contains)",
)
async def search_by_first_name(
    first_name: str, db: AsyncSession = Depends(get_db_session)
) -> List[UserResponse]:
    return await user_service.search(db, "first_name", first_name)


@router.get(
    "/search/lastname/{last_name}",
    response_model=List[UserResponse],
    summary="Search users by last name (case-insensitive contains)",
)
async def search_by_last_name(
    last_name: str, db: AsyncSession = Depends(get_db_session)
) -> List[UserResponse]:
    return await user_service.search(db, "last_name", last_name)


@router.get(
    "/search/username/{username}",
    response_model=List[UserResponse],
    summary="Search users by username (case-insensitive contains)",
)
async def search_by_username(
    username: str, db: AsyncSession = Depends(get_db_session)
) -> List[UserResponse]:
    return await user_service.search(db, "username", username)


@router.get("/{user_id}", response_model=UserResponse, summary="Get a user by ID")
async def get_user(user_id: int, db: AsyncSession = Depends(get_db_session)) -> UserResponse:
    return await user_service.get_user(db, user_id)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={
        401: {"description": "Not authenticated", "model": ErrorResponse},
        403: {"description": "Not your account", "model": ErrorResponse},
        409: {"description": "Username or email already in use", "model": ErrorResponse},
    },
    summary="Update your profile",
)
async def update_user(
    user_id: int,
    request: UserUpdateRequest,
    identity: User = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    ensure_actor(identity, user_id)
    return await user_service.update_user(db, user_id, request)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    responses={
        401: {"description": "Not authenticated", "model": ErrorResponse},
        403: {"description": "Not your account", "model": ErrorResponse},
    },
    summary="Delete your account",
    description="Deletes the account with its posts, comments, likes and follow edges.",
)
async def delete_user(
    user_id: int,
    identity: User = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    ensure_actor(identity, user_id)
    await user_service.delete_user(db, user_id)
    return MessageResponse(message="User deleted successfully")


@router.get("/{user_id}/following", response_model=List[UserResponse], summary="Users this user follows")
async def get_following(user_id: int, db: AsyncSession = Depends(get_db_session)) -> List[UserResponse]:
    return await user_service.following(db, user_id)


@router.get("/{user_id}/followers", response_model=List[UserResponse], summary="Users following this user")
async def get_followers(user_id: int, db: AsyncSession = Depends(get_db_session)) -> List[UserResponse]:
    return await user_service.followers(db, user_id)


@router.get("/{user_id}/following/count", response_model=int, summary="Number of users followed")
async def get_following_count(user_id: int, db: AsyncSession = Depends(get_db_session)) -> int:
    return await user_service.following_count(db, user_id)


@router.get("/{user_id}/followers/count", response_model=int, summary="Number of followers")
async def get_followers_count(user_id: int, db: AsyncSession = Depends(get_db_session)) -> int:
    return await user_service.followers_count(db, user_id)
