"""
SocialHub Backend — Post Repository
====================================

What:  Post CRUD plus every listing the API exposes: newest-first lists,
       content search, date windows, per-author lists and the follow feed.
How:   Listings select (Post, author, like_count, comment_count) in one
       statement; counts are correlated scalar subqueries.

Ordering:
    Every newest-first listing orders by created_at DESC, id DESC so posts
    created in the same instant keep a stable order across pages.
"""

import logging
from datetime import datetime
from typing import List, NamedTuple, Optional, Tuple

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.models.comment import Comment
from socialhub.models.follow import Follow
from socialhub.models.like import Like
from socialhub.models.post import Post
from socialhub.models.user import User
from socialhub.schemas.common import PageParams

logger = logging.getLogger(__name__)


class PostView(NamedTuple):
    """A post joined with its author and aggregate counters."""

    post: Post
    author: User
    like_count: int
    comment_count: int


def _like_count():
    return (
        select(func.count(Like.id))
        .where(Like.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
    )


def _comment_count():
    return (
        select(func.count(Comment.id))
        .where(Comment.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
    )


def _post_views() -> Select:
    return (
        select(
            Post,
            User,
            _like_count().label("like_count"),
            _comment_count().label("comment_count"),
        )
        .join(User, User.id == Post.user_id)
    )


def _newest_first(stmt: Select) -> Select:
    return stmt.order_by(Post.created_at.desc(), Post.id.desc())


def _following_ids(user_id: int) -> Select:
    return select(Follow.following_id).where(Follow.follower_id == user_id)


class PostRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _views(self, stmt: Select) -> List[PostView]:
        result = await self.session.execute(stmt)
        return [PostView(*row) for row in result.all()]

    async def _count(self, *criteria) -> int:
        stmt = select(func.count(Post.id))
        if criteria:
            stmt = stmt.where(*criteria)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def _listing(
        self, criteria: Tuple, params: Optional[PageParams] = None
    ) -> List[PostView]:
        stmt = _newest_first(_post_views().where(*criteria))
        if params is not None:
            stmt = stmt.offset(params.offset).limit(params.size)
        return await self._views(stmt)

    # ── Single post ───────────────────────────────────────────────────────

    async def get(self, post_id: int) -> Optional[Post]:
        return await self.session.get(Post, post_id)

    async def get_view(self, post_id: int) -> Optional[PostView]:
        views = await self._views(_post_views().where(Post.id == post_id))
        return views[0] if views else None

    async def create(self, user_id: int, content: str) -> Post:
        post = Post(user_id=user_id, content=content)
        self.session.add(post)
        await self.session.flush()
        return post

    async def update_content(self, post: Post, content: str) -> Post:
        post.content = content
        await self.session.flush()
        return post

    async def delete(self, post: Post) -> None:
        """Delete a post together with its likes and comments."""
        await self.session.execute(delete(Like).where(Like.post_id == post.id))
        await self.session.execute(delete(Comment).where(Comment.post_id == post.id))
        await self.session.delete(post)
        await self.session.flush()

    # ── Listings ──────────────────────────────────────────────────────────

    async def list_all(self, params: Optional[PageParams] = None) -> List[PostView]:
        return await self._listing((), params)

    async def count_all(self) -> int:
        return await self._count()

    async def list_by_user(
        self, user_id: int, params: Optional[PageParams] = None
    ) -> List[PostView]:
        return await self._listing((Post.user_id == user_id,), params)

    async def count_by_user(self, user_id: int) -> int:
        return await self._count(Post.user_id == user_id)

    async def search(self, term: str, params: Optional[PageParams] = None) -> List[PostView]:
        """Case-insensitive substring match on content."""
        return await self._listing((self._content_matches(term),), params)

    async def count_search(self, term: str) -> int:
        return await self._count(self._content_matches(term))

    @staticmethod
    def _content_matches(term: str):
        return func.lower(Post.content).contains(term.lower(), autoescape=True)

    async def list_created_after(self, since: datetime) -> List[PostView]:
        return await self._listing((Post.created_at > since,))

    async def list_created_between(self, start: datetime, end: datetime) -> List[PostView]:
        """Posts with start <= created_at <= end."""
        return await self._listing((Post.created_at >= start, Post.created_at <= end))

    # ── Feed ──────────────────────────────────────────────────────────────

    async def feed(self, user_id: int, params: Optional[PageParams] = None) -> List[PostView]:
        """Posts authored by the accounts `user_id` follows, newest first."""
        return await self._listing((Post.user_id.in_(_following_ids(user_id)),), params)

    async def count_feed(self, user_id: int) -> int:
        return await self._count(Post.user_id.in_(_following_ids(user_id)))
