"""
SocialHub Backend — Follow Service
===================================

What:  Follow/unfollow and every read over the follow graph.
Who:   Called by the /api/follows routes.

Rules:
    - follower_id == following_id         → ValidationError (400)
    - either account missing              → NotFoundError   (404)
    - edge already present                → ConflictError   (409), decided
                                            by uq_follows_pair on INSERT
    - unfollow without an edge            → NotFoundError   (404)
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.exceptions import ConflictError, NotFoundError, ValidationError
from socialhub.repositories.follow_repository import FollowRepository
from socialhub.repositories.user_repository import UserRepository
from socialhub.schemas.follow import FollowResponse
from socialhub.schemas.user import UserResponse
from socialhub.services.errors import translate_database_errors
from socialhub.services.user_service import to_user_responses

logger = logging.getLogger(__name__)


class FollowService:
    async def _require_users(self, db: AsyncSession, *user_ids: int) -> None:
        users = UserRepository(db)
        for user_id in user_ids:
            if not await users.exists_by_id(user_id):
                raise NotFoundError(resource="user", resource_id=user_id)

    @translate_database_errors("following a user")
    async def follow(
        self, db: AsyncSession, follower_id: int, following_id: int
    ) -> FollowResponse:
        if follower_id == following_id:
            raise ValidationError(message="You cannot follow yourself", field="following_id")
        await self._require_users(db, follower_id, following_id)

        result = await FollowRepository(db).create(follower_id, following_id)
        if result.conflict:
            raise ConflictError(
                message="You are already following this user",
                context={"follower_id": follower_id, "following_id": following_id},
            )

        logger.info("User %s followed user %s", follower_id, following_id)
        return FollowResponse.model_validate(result.entity)

    @translate_database_errors("unfollowing a user")
    async def unfollow(self, db: AsyncSession, follower_id: int, following_id: int) -> None:
        await self._require_users(db, follower_id, following_id)
        if not await FollowRepository(db).delete(follower_id, following_id):
            raise NotFoundError(
                resource="follow relationship",
                message="You are not following this user",
            )
        logger.info("User %s unfollowed user %s", follower_id, following_id)

    @translate_database_errors("checking a follow")
    async def is_following(self, db: AsyncSession, follower_id: int, following_id: int) -> bool:
        return await FollowRepository(db).exists(follower_id, following_id)

    @translate_database_errors("loading a follow relationship")
    async def get_relationship(
        self, db: AsyncSession, follower_id: int, following_id: int
    ) -> FollowResponse:
        edge = await FollowRepository(db).get(follower_id, following_id)
        if edge is None:
            raise NotFoundError(
                resource="follow relationship",
                message="Follow relationship not found",
            )
        return FollowResponse.model_validate(edge)

    @translate_database_errors("listing followed users")
    async def following(self, db: AsyncSession, user_id: int) -> List[UserResponse]:
        await self._require_users(db, user_id)
        return to_user_responses(await UserRepository(db).following_of(user_id))

    @translate_database_errors("listing followers")
    async def followers(self, db: AsyncSession, user_id: int) -> List[UserResponse]:
        await self._require_users(db, user_id)
        return to_user_responses(await UserRepository(db).followers_of(user_id))

    @translate_database_errors("counting followed users")
    async def following_count(self, db: AsyncSession, user_id: int) -> int:
        await self._require_users(db, user_id)
        return await UserRepository(db).count_following(user_id)

    @translate_database_errors("counting followers")
    async def followers_count(self, db: AsyncSession, user_id: int) -> int:
        await self._require_users(db, user_id)
        return await UserRepository(db).count_followers(user_id)

    @translate_database_errors("listing follow relationships")
    async def following_relationships(
        self, db: AsyncSession, user_id: int
    ) -> List[FollowResponse]:
        await self._require_users(db, user_id)
        edges = await FollowRepository(db).following_edges(user_id)
        return [FollowResponse.model_validate(e) for e in edges]

    @translate_database_errors("listing follower relationships")
    async def follower_relationships(
        self, db: AsyncSession, user_id: int
    ) -> List[FollowResponse]:
        await self._require_users(db, user_id)
        edges = await FollowRepository(db).follower_edges(user_id)
        return [FollowResponse.model_validate(e) for e in edges]

    @translate_database_errors("finding mutual follows")
    async def mutual_following(
        self, db: AsyncSession, user_id1: int, user_id2: int
    ) -> List[UserResponse]:
        await self._require_users(db, user_id1, user_id2)
        return to_user_responses(await FollowRepository(db).mutual_following(user_id1, user_id2))

    @translate_database_errors("building follow suggestions")
    async def suggestions(self, db: AsyncSession, user_id: int, limit: int = 10) -> List[UserResponse]:
        await self._require_users(db, user_id)
        return to_user_responses(await FollowRepository(db).suggestions(user_id, limit))


# Module-level singleton
follow_service = FollowService()
