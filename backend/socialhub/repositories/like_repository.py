"""SocialHub Backend — Like Repository (one row per user per post)."""

from typing import List, Optional, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.models.like import Like
from socialhub.repositories.results import WriteResult, add_or_conflict


class LikeRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: int, post_id: int) -> Optional[Like]:
        result = await self.session.execute(
            select(Like).where(Like.user_id == user_id, Like.post_id == post_id)
        )
        return result.scalar_one_or_none()

    async def exists(self, user_id: int, post_id: int) -> bool:
        return await self.get(user_id, post_id) is not None

    async def create(self, user_id: int, post_id: int) -> WriteResult[Like]:
        like = Like(user_id=user_id, post_id=post_id)
        if not await add_or_conflict(self.session, like):
            return WriteResult.conflicted()
        return WriteResult.created(like)

    async def delete(self, user_id: int, post_id: int) -> bool:
        result = await self.session.execute(
            delete(Like).where(Like.user_id == user_id, Like.post_id == post_id)
        )
        return result.rowcount > 0

    async def list_by_post(self, post_id: int) -> List[Like]:
        result = await self.session.execute(
            select(Like)
            .where(Like.post_id == post_id)
            .order_by(Like.created_at.desc(), Like.id.desc())
        )
        return list(result.scalars().all())

    async def list_by_user(self, user_id: int) -> List[Like]:
        result = await self.session.execute(
            select(Like)
            .where(Like.user_id == user_id)
            .order_by(Like.created_at.desc(), Like.id.desc())
        )
        return list(result.scalars().all())

    async def count_by_post(self, post_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Like.id)).where(Like.post_id == post_id)
        )
        return result.scalar() or 0

    async def count_by_user(self, user_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Like.id)).where(Like.user_id == user_id)
        )
        return result.scalar() or 0

    async def most_liked_post_ids(self, limit: int) -> List[Tuple[int, int]]:
        """(post_id, like_count) pairs, highest count first."""
        count = func.count(Like.id)
        result = await self.session.execute(
            select(Like.post_id, count.label("like_count"))
            .group_by(Like.post_id)
            .order_by(count.desc(), Like.post_id.desc())
            .limit(limit)
        )
        return [(post_id, like_count) for post_id, like_count in result.all()]
