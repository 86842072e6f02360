"""
SocialHub Backend — Post Service (includes the Feed Assembler)
===============================================================

What:  Post CRUD, listings, search, date windows and the follow feed.
Who:   Called by the /api/posts routes.

Feed assembly (get_feed):
    ┌──────────────┐    ┌─────────────────────┐    ┌─────────────────────┐
    │ user exists? │───▶│ following_id where  │───▶│ posts by those ids, │
    │ else 404     │    │ follower_id = user  │    │ created_at DESC,    │
    └──────────────┘    └─────────────────────┘    │ id DESC             │
                                                   └─────────────────────┘
    Steps 2 and 3 run as one statement (IN subquery). Following nobody
    yields an empty list. With a PageParams the same query is windowed
    with OFFSET/LIMIT and wrapped in a Page.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.exceptions import NotFoundError, ValidationError
from socialhub.models.post import Post
from socialhub.models.user import User
from socialhub.repositories.post_repository import PostRepository, PostView
from socialhub.repositories.user_repository import UserRepository
from socialhub.schemas.common import Page, PageParams
from socialhub.schemas.post import PostResponse
from socialhub.schemas.user import UserResponse
from socialhub.security.dependencies import ensure_actor
from socialhub.services.errors import translate_database_errors

logger = logging.getLogger(__name__)


def to_post_response(view: PostView) -> PostResponse:
    return PostResponse(
        id=view.post.id,
        content=view.post.content,
        created_at=view.post.created_at,
        updated_at=view.post.updated_at,
        user=UserResponse.model_validate(view.author),
        like_count=view.like_count,
        comment_count=view.comment_count,
    )


def parse_timestamp(value: str, field: str) -> datetime:
    """
    Parse an ISO-8601 path parameter into an aware UTC datetime.

    Naive values are taken to be UTC.

    Raises:
        ValidationError: value is not ISO-8601 (→ 400)
    """
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(
            message=f"Invalid date '{value}'. Use ISO-8601, e.g. 2024-01-15T10:30:00",
            field=field,
        )
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class PostService:
    """Stateless; every method receives the request's session."""

    async def _require_user(self, db: AsyncSession, user_id: int) -> None:
        if not await UserRepository(db).exists_by_id(user_id):
            raise NotFoundError(resource="user", resource_id=user_id)

    async def _require_post(self, posts: PostRepository, post_id: int) -> Post:
        post = await posts.get(post_id)
        if post is None:
            raise NotFoundError(resource="post", resource_id=post_id)
        return post

    async def _view(self, posts: PostRepository, post_id: int) -> PostResponse:
        view = await posts.get_view(post_id)
        if view is None:
            raise NotFoundError(resource="post", resource_id=post_id)
        return to_post_response(view)

    # ── CRUD ──────────────────────────────────────────────────────────────

    @translate_database_errors("creating a post")
    async def create_post(self, db: AsyncSession, user_id: int, content: str) -> PostResponse:
        await self._require_user(db, user_id)
        posts = PostRepository(db)
        post = await posts.create(user_id, content)
        logger.info("User %s created post %s", user_id, post.id)
        return await self._view(posts, post.id)

    @translate_database_errors("loading a post")
    async def get_post(self, db: AsyncSession, post_id: int) -> PostResponse:
        return await self._view(PostRepository(db), post_id)

    @translate_database_errors("updating a post")
    async def update_post(
        self, db: AsyncSession, identity: User, post_id: int, content: str
    ) -> PostResponse:
        """
        Raises:
            NotFoundError: no such post (→ 404)
            ForbiddenError: caller is not the author (→ 403)
        """
        posts = PostRepository(db)
        post = await self._require_post(posts, post_id)
        ensure_actor(identity, post.user_id)
        await posts.update_content(post, content)
        return await self._view(posts, post_id)

    @translate_database_errors("deleting a post")
    async def delete_post(self, db: AsyncSession, identity: User, post_id: int) -> None:
        posts = PostRepository(db)
        post = await self._require_post(posts, post_id)
        ensure_actor(identity, post.user_id)
        await posts.delete(post)
        logger.info("User %s deleted post %s", identity.id, post_id)

    # ── Listings ──────────────────────────────────────────────────────────

    @translate_database_errors("listing posts")
    async def list_posts(
        self, db: AsyncSession, params: Optional[PageParams] = None
    ) -> Union[List[PostResponse], Page[PostResponse]]:
        posts = PostRepository(db)
        items = [to_post_response(v) for v in await posts.list_all(params)]
        if params is None:
            return items
        return Page[PostResponse].build(items, await posts.count_all(), params)

    @translate_database_errors("listing a user's posts")
    async def list_user_posts(
        self, db: AsyncSession, user_id: int, params: Optional[PageParams] = None
    ) -> Union[List[PostResponse], Page[PostResponse]]:
        await self._require_user(db, user_id)
        posts = PostRepository(db)
        items = [to_post_response(v) for v in await posts.list_by_user(user_id, params)]
        if params is None:
            return items
        return Page[PostResponse].build(items, await posts.count_by_user(user_id), params)

    @translate_database_errors("counting a user's posts")
    async def count_user_posts(self, db: AsyncSession, user_id: int) -> int:
        await self._require_user(db, user_id)
        return await PostRepository(db).count_by_user(user_id)

    @translate_database_errors("searching posts")
    async def search(
        self, db: AsyncSession, content: str, params: Optional[PageParams] = None
    ) -> Union[List[PostResponse], Page[PostResponse]]:
        posts = PostRepository(db)
        items = [to_post_response(v) for v in await posts.search(content, params)]
        if params is None:
            return items
        return Page[PostResponse].build(items, await posts.count_search(content), params)

    @translate_database_errors("listing posts by date")
    async def posts_after(self, db: AsyncSession, date: str) -> List[PostResponse]:
        since = parse_timestamp(date, "date")
        views = await PostRepository(db).list_created_after(since)
        return [to_post_response(v) for v in views]

    @translate_database_errors("listing posts by date range")
    async def posts_between(self, db: AsyncSession, start: str, end: str) -> List[PostResponse]:
        start_at = parse_timestamp(start, "start")
        end_at = parse_timestamp(end, "end")
        if start_at > end_at:
            raise ValidationError(message="Start date must not be after end date", field="start")
        views = await PostRepository(db).list_created_between(start_at, end_at)
        return [to_post_response(v) for v in views]

    # ── Feed ──────────────────────────────────────────────────────────────

    @translate_database_errors("building a feed")
    async def get_feed(
        self, db: AsyncSession, user_id: int, params: Optional[PageParams] = None
    ) -> Union[List[PostResponse], Page[PostResponse]]:
        """
        Posts by the accounts `user_id` follows, newest first.

        Returns:
            the full list, or a Page when `params` is given

        Raises:
            NotFoundError: no such user (→ 404)
        """
        await self._require_user(db, user_id)
        posts = PostRepository(db)
        items = [to_post_response(v) for v in await posts.feed(user_id, params)]
        if params is None:
            return items
        return Page[PostResponse].build(items, await posts.count_feed(user_id), params)


# Module-level singleton
post_service = PostService()
