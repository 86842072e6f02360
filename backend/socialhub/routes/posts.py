"""
SocialHub Backend — Post Routes
================================

What:  Post CRUD, listings, search, date windows and feeds under /api/posts.

Access policy:
    POST /api/posts                 requires identity; author is the caller
    POST /api/posts/user/{user_id}  requires identity; caller must be {user_id}
    PUT/DELETE /api/posts/{id}      requires identity; caller must be the author
    GET  /api/posts/feed            requires identity; feed of the caller
    everything else                 public

Paginated variants take ?page (0-based) and ?size (1-100, default 10),
return a Page envelope and set X-Total-Count.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.database import get_db_session
from socialhub.models.user import User
from socialhub.routes.pagination import page_params, with_total_count
from socialhub.schemas.common import ErrorResponse, MessageResponse, Page, PageParams
from socialhub.schemas.post import PostRequest, PostResponse
from socialhub.security.dependencies import ensure_actor, require_identity
from socialhub.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/posts",
    tags=["Posts"],
    responses={404: {"description": "Post or user not found", "model": ErrorResponse}},
)

_privileged = {
    401: {"description": "Not authenticated", "model": ErrorResponse},
    403: {"description": "Not the acting user or author", "model": ErrorResponse},
}


# ── Create ────────────────────────────────────────────────────────────────

@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_privileged,
    summary="Create a post as the authenticated caller",
)
async def create_post(
    request: PostRequest,
    identity: User = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.create_post(db, identity.id, request.content)


@router.post(
    "/user/{user_id}",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_privileged,
    summary="Create a post for a user (must be the caller)",
)
async def create_post_for_user(
    user_id: int,
    request: PostRequest,
    identity: User = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    ensure_actor(identity, user_id)
    return await post_service.create_post(db, user_id, request.content)


# ── Listings ──────────────────────────────────────────────────────────────

@router.get("", response_model=List[PostResponse], summary="All posts, newest first")
async def list_posts(db: AsyncSession = Depends(get_db_session)) -> List[PostResponse]:
    return await post_service.list_posts(db)


@router.get(
    "/paginated",
    response_model=Page[PostResponse],
    summary="All posts, newest first, one page at a time",
)
async def list_posts_paginated(
    response: Response,
    params: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db_session),
) -> Page[PostResponse]:
    return with_total_count(response, await post_service.list_posts(db, params))


@router.get("/search", response_model=List[PostResponse], summary="Search post content")
async def search_posts(
    content: str = Query(min_length=1, description="Case-insensitive substring"),
    db: AsyncSession = Depends(get_db_session),
) -> List[PostResponse]:
    return await post_service.search(db, content)


@router.get("/search/paginated", response_model=Page[PostResponse], summary="Search post content, paginated")
async def search_posts_paginated(
    response: Response,
    content: str = Query(min_length=1, description="Case-insensitive substring"),
    params: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db_session),
) -> Page[PostResponse]:
    return with_total_count(response, await post_service.search(db, content, params))


@router.get(
    "/after/{date}",
    response_model=List[PostResponse],
    responses={400: {"description": "Date is not ISO-8601", "model": ErrorResponse}},
    summary="Posts created after a timestamp",
)
async def posts_after(date: str, db: AsyncSession = Depends(get_db_session)) -> List[PostResponse]:
    return await post_service.posts_after(db, date)


@router.get(
    "/between/{start}/{end}",
    response_model=List[PostResponse],
    responses={400: {"description": "Date is not ISO-8601", "model": ErrorResponse}},
    summary="Posts created within a time window (inclusive)",
)
async def posts_between(
    start: str, end: str, db: AsyncSession = Depends(get_db_session)
) -> List[PostResponse]:
    return await post_service.posts_between(db, start, end)


# ── Feed ──────────────────────────────────────────────────────────────────

@router.get(
    "/feed",
    response_model=List[PostResponse],
    responses={401: {"description": "Not authenticated", "model": ErrorResponse}},
    summary="Feed of the authenticated caller",
    description="Posts by the accounts the caller follows, newest first.",
)
async def my_feed(
    identity: User = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> List[PostResponse]:
    return await post_service.get_feed(db, identity.id)


@router.get("/feed/{user_id}", response_model=List[PostResponse], summary="Feed of a user")
async def user_feed(user_id: int, db: AsyncSession = Depends(get_db_session)) -> List[PostResponse]:
    return await post_service.get_feed(db, user_id)


@router.get("/feed/{user_id}/paginated", response_model=Page[PostResponse], summary="Feed of a user, paginated")
async def user_feed_paginated(
    user_id: int,
    response: Response,
    params: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db_session),
) -> Page[PostResponse]:
    return with_total_count(response, await post_service.get_feed(db, user_id, params))


# ── Per-user listings ─────────────────────────────────────────────────────

@router.get("/user/{user_id}", response_model=List[PostResponse], summary="Posts by a user")
async def user_posts(user_id: int, db: AsyncSession = Depends(get_db_session)) -> List[PostResponse]:
    return await post_service.list_user_posts(db, user_id)


@router.get("/user/{user_id}/paginated", response_model=Page[PostResponse], summary="Posts by a user, paginated")
async def user_posts_paginated(
    user_id: int,
    response: Response,
    params: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db_session),
) -> Page[PostResponse]:
    return with_total_count(response, await post_service.list_user_posts(db, user_id, params))


@router.get("/user/{user_id}/count", response_model=int, summary="Number of posts by a user")
async def user_post_count(user_id: int, db: AsyncSession = Depends(get_db_session)) -> int:
    return await post_service.count_user_posts(db, user_id)


# ── Single post ───────────────────────────────────────────────────────────

@router.get("/{post_id}", response_model=PostResponse, summary="Get a post by ID")
async def get_post(post_id: int, db: AsyncSession = Depends(get_db_session)) -> PostResponse:
    return await post_service.get_post(db, post_id)


@router.put("/{post_id}", response_model=PostResponse, responses=_privileged, summary="Edit your post")
async def update_post(
    post_id: int,
    request: PostRequest,
    identity: User = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.update_post(db, identity, post_id, request.content)


@router.delete("/{post_id}", response_model=MessageResponse, responses=_privileged, summary="Delete your post")
async def delete_post(
    post_id: int,
    identity: User = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await post_service.delete_post(db, identity, post_id)
    return MessageResponse(message="Post deleted successfully")
