"""
SocialHub Backend — Comment Repository
=======================================

What:  Comment CRUD and listings, each row joined with its author.

Ordering:
    per post     oldest first (a conversation reads top to bottom)
    per user     newest first
    search       newest first
    recent       newest first, limited
"""

from typing import List, NamedTuple, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.models.comment import Comment
from socialhub.models.user import User
from socialhub.schemas.common import PageParams


class CommentView(NamedTuple):
    comment: Comment
    author: User


def _comment_views() -> Select:
    return select(Comment, User).join(User, User.id == Comment.user_id)


class CommentRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _views(self, stmt: Select) -> List[CommentView]:
        result = await self.session.execute(stmt)
        return [CommentView(*row) for row in result.all()]

    async def get(self, comment_id: int) -> Optional[Comment]:
        return await self.session.get(Comment, comment_id)

    async def get_view(self, comment_id: int) -> Optional[CommentView]:
        views = await self._views(_comment_views().where(Comment.id == comment_id))
        return views[0] if views else None

    async def create(self, user_id: int, post_id: int, content: str) -> Comment:
        comment = Comment(user_id=user_id, post_id=post_id, content=content)
        self.session.add(comment)
        await self.session.flush()
        return comment

    async def update_content(self, comment: Comment, content: str) -> Comment:
        comment.content = content
        await self.session.flush()
        return comment

    async def delete(self, comment: Comment) -> None:
        await self.session.delete(comment)
        await self.session.flush()

    async def list_by_post(
        self, post_id: int, params: Optional[PageParams] = None
    ) -> List[CommentView]:
        stmt = (
            _comment_views()
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        if params is not None:
            stmt = stmt.offset(params.offset).limit(params.size)
        return await self._views(stmt)

    async def count_by_post(self, post_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Comment.id)).where(Comment.post_id == post_id)
        )
        return result.scalar() or 0

    async def list_by_user(self, user_id: int) -> List[CommentView]:
        return await self._views(
            _comment_views()
            .where(Comment.user_id == user_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )

    async def search(self, text: str) -> List[CommentView]:
        return await self._views(
            _comment_views()
            .where(func.lower(Comment.content).contains(text.lower(), autoescape=True))
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )

    async def list_recent(self, limit: int) -> List[CommentView]:
        return await self._views(
            _comment_views()
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .limit(limit)
        )
