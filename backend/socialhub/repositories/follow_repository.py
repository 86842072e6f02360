"""
SocialHub Backend — Follow Repository
======================================

What:  The directed follow graph: edge insert/delete, membership checks,
       edge listings, mutual follows and friends-of-friends suggestions.
How:   uq_follows_pair and ck_follows_no_self on the table are authoritative;
       create() reports a violation of either as CONFLICT.
"""

import logging
from typing import List, Optional

from sqlalchemy import and_, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from socialhub.models.follow import Follow
from socialhub.models.user import User
from socialhub.repositories.results import WriteResult, add_or_conflict

logger = logging.getLogger(__name__)


class FollowRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, follower_id: int, following_id: int) -> Optional[Follow]:
        result = await self.session.execute(
            select(Follow).where(
                Follow.follower_id == follower_id,
                Follow.following_id == following_id,
            )
        )
        return result.scalar_one_or_none()

    async def exists(self, follower_id: int, following_id: int) -> bool:
        return await self.get(follower_id, following_id) is not None

    async def create(self, follower_id: int, following_id: int) -> WriteResult[Follow]:
        edge = Follow(follower_id=follower_id, following_id=following_id)
        if not await add_or_conflict(self.session, edge):
            return WriteResult.conflicted()
        return WriteResult.created(edge)

    async def delete(self, follower_id: int, following_id: int) -> bool:
        """Remove the edge; False when it did not exist."""
        result = await self.session.execute(
            delete(Follow).where(
                Follow.follower_id == follower_id,
                Follow.following_id == following_id,
            )
        )
        return result.rowcount > 0

    async def following_edges(self, user_id: int) -> List[Follow]:
        result = await self.session.execute(
            select(Follow)
            .where(Follow.follower_id == user_id)
            .order_by(Follow.created_at.desc(), Follow.id.desc())
        )
        return list(result.scalars().all())

    async def follower_edges(self, user_id: int) -> List[Follow]:
        result = await self.session.execute(
            select(Follow)
            .where(Follow.following_id == user_id)
            .order_by(Follow.created_at.desc(), Follow.id.desc())
        )
        return list(result.scalars().all())

    async def mutual_following(self, user_id1: int, user_id2: int) -> List[User]:
        """Accounts followed by both users."""
        first = aliased(Follow)
        second = aliased(Follow)
        result = await self.session.execute(
            select(User)
            .join(first, and_(first.following_id == User.id, first.follower_id == user_id1))
            .join(second, and_(second.following_id == User.id, second.follower_id == user_id2))
            .order_by(User.id)
        )
        return list(result.scalars().all())

    async def suggestions(self, user_id: int, limit: int = 10) -> List[User]:
        """
        Friends-of-friends: accounts followed by the people `user_id` follows,
        excluding `user_id` and anyone it already follows. Ranked by how many
        of those people follow the suggestion.
        """
        direct = aliased(Follow)
        second_hop = aliased(Follow)
        already_following = select(Follow.following_id).where(Follow.follower_id == user_id)
        score = func.count(second_hop.follower_id.distinct())

        ranked = (
            select(second_hop.following_id.label("user_id"), score.label("score"))
            .join(direct, direct.following_id == second_hop.follower_id)
            .where(
                direct.follower_id == user_id,
                second_hop.following_id != user_id,
                second_hop.following_id.not_in(already_following),
            )
            .group_by(second_hop.following_id)
            .subquery()
        )
        result = await self.session.execute(
            select(User)
            .join(ranked, ranked.c.user_id == User.id)
            .order_by(ranked.c.score.desc(), User.id)
            .limit(limit)
        )
        return list(result.scalars().all())
